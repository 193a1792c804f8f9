"""
Defect Detection Module

Implements flood-fill connected-component labeling of thresholded C-Scan grids.
"""

from .defect_detector import DefectDetector, MIN_DEFECT_AREA

__all__ = ['DefectDetector', 'MIN_DEFECT_AREA']
