from .instruments import Bond, BucketedSector, ReferenceData

__all__ = ["Bond", "BucketedSector", "ReferenceData"]
