from vitalcare.domains.places.services.places_service import PlacesError, PlacesNotConfigured, search_nearby

__all__ = ["search_nearby", "PlacesError", "PlacesNotConfigured"]
