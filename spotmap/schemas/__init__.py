from .location import LocationRecord, IngestionResult, NearestResult

__all__ = ["LocationRecord", "IngestionResult", "NearestResult"]
