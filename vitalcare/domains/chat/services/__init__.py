from vitalcare.domains.chat.services.chat_service import create_chat_log, list_chat_logs

__all__ = ["create_chat_log", "list_chat_logs"]
