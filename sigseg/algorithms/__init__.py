from .pelt.detector import PeltDetector

__all__ = ["PeltDetector"]
