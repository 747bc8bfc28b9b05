"""
Debug utilities for the resistor scanner.

Provides a unified debugging interface with visual logging and step tracking.
Classification stays pure; painting classified pixels happens here, on a
copy of the image.
"""

import logging
import numpy as np
import cv2
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, Sequence
from pathlib import Path

from services.color.palette import Color, ColorPalette
from utils.visual_logger import VisualLogger

logger = logging.getLogger(__name__)


@dataclass
class DebugStep:
    """Represents a single debug step in the pipeline."""
    step_id: str
    name: str
    description: str
    data: Dict[str, Any] = field(default_factory=dict)


class DebugContext:
    """
    Manages debug state and visual logging throughout the pipeline.
    
    Usage:
        debug = DebugContext(enabled=True, output_dir="experiments")
        debug.add_step("01_scanlines", "Classified Scanlines", image, {"rows": [33, 50, 67]})
        debug.save_log()
    """
    
    def __init__(
        self,
        enabled: bool = False,
        output_dir: Optional[str] = None,
        image_name: str = "unknown",
        comparison_tag: Optional[str] = None
    ):
        """
        Initialize debug context.
        
        Args:
            enabled: Whether debug mode is enabled
            output_dir: Directory for saving visual logs
            image_name: Name of the image being processed
            comparison_tag: Optional tag grouping related runs (default 'pipeline')
        """
        self.enabled = enabled
        self.image_name = image_name
        self.comparison_tag = comparison_tag
        self.steps: List[DebugStep] = []
        self.visual_logger: Optional[VisualLogger] = None
        self._log_dir: Optional[Path] = None
        
        if enabled:
            self.visual_logger = VisualLogger(output_dir)
            strategy_name = comparison_tag if comparison_tag else 'pipeline'
            self.visual_logger.start_log(strategy_name, image_name)
            if output_dir:
                self._log_dir = Path(output_dir) / Path(image_name).stem / strategy_name
    
    def add_step(
        self,
        step_id: str,
        name: str,
        image: Optional[Any] = None,
        data: Optional[Dict[str, Any]] = None,
        description: str = ""
    ) -> None:
        """
        Add a debug step.
        
        Args:
            step_id: Unique identifier for the step (e.g., "01_scanlines")
            name: Human-readable step name
            image: Optional image to log (numpy array)
            data: Optional metadata dictionary
            description: Optional description of the step
        """
        if not self.enabled:
            return
        
        clean_data = {}
        if data:
            for key, value in data.items():
                clean_data[key] = self._clean_value(value)
        
        self.steps.append(DebugStep(
            step_id=step_id,
            name=name,
            description=description,
            data=clean_data
        ))
        
        if self.visual_logger and image is not None:
            self.visual_logger.add_step(step_id, description or name, image, clean_data)
    
    def _clean_value(self, value):
        """Recursively clean a value for JSON serialization."""
        if isinstance(value, Enum):
            return value.name
        if hasattr(value, 'to_dict') and callable(getattr(value, 'to_dict')):
            return self._clean_value(value.to_dict())
        if isinstance(value, np.ndarray):
            return value.tolist() if value.size < 100 else f"<ndarray shape={value.shape}>"
        elif isinstance(value, np.bool_):
            return bool(value)
        elif isinstance(value, np.integer):
            return int(value)
        elif isinstance(value, np.floating):
            return float(value)
        elif isinstance(value, (list, tuple)):
            return [self._clean_value(v) for v in value]
        elif isinstance(value, dict):
            return {k: self._clean_value(v) for k, v in value.items()}
        return value
    
    def save_log(self, final_image: Optional[np.ndarray] = None) -> Optional[str]:
        """
        Save the debug log.
        
        Args:
            final_image: Optional final image to save. If None, uses the last step's image.
            
        Returns:
            Path to saved log, or None if disabled or nothing to save
        """
        if not self.enabled or not self.visual_logger:
            return None
        
        if final_image is None:
            if not self.visual_logger.steps:
                logger.warning("No steps available to use as final image")
                return None
            final_image = self.visual_logger.steps[-1]['image']
        
        log_path = self.visual_logger.save_log(final_image)
        return log_path or (str(self._log_dir) if self._log_dir else None)
    
    def get_summary(self) -> Dict[str, Any]:
        """
        Get debug summary as dictionary.
        
        Returns:
            Dictionary with debug information
        """
        return {
            "enabled": self.enabled,
            "image_name": self.image_name,
            "comparison_tag": self.comparison_tag,
            "steps": [
                {
                    "step_id": step.step_id,
                    "name": step.name,
                    "description": step.description,
                    "data": step.data
                }
                for step in self.steps
            ],
            "step_count": len(self.steps),
            "log_dir": str(self._log_dir) if self._log_dir else None
        }
    
    def visualize_bands(
        self,
        image: np.ndarray,
        bands: Sequence[Color],
        palette: ColorPalette,
        label: str = ""
    ) -> np.ndarray:
        """Draw a swatch strip of detected band colors along the top of the image."""
        vis = image.copy()
        h_img, w_img = vis.shape[:2]
        swatch = max(10, min(40, h_img // 8))
        for i, band in enumerate(bands):
            x = 5 + i * (swatch + 5)
            if x + swatch > w_img:
                break
            color = tuple(int(c) for c in palette.display_color(band))
            cv2.rectangle(vis, (x, 5), (x + swatch, 5 + swatch), color, -1)
            cv2.rectangle(vis, (x, 5), (x + swatch, 5 + swatch), (128, 128, 128), 1)
        if label:
            cv2.putText(vis, label, (5, min(h_img - 5, swatch + 25)),
                       cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 255, 0), 2)
        return vis
    
    def visualize_error(
        self,
        image: np.ndarray,
        error_message: str,
        error_code: Optional[str] = None
    ) -> np.ndarray:
        """Create visualization for error state."""
        vis = image.copy()
        text = error_message
        if error_code:
            text = f"{error_code}: {error_message}"
        cv2.putText(vis, text, (10, 30),
                   cv2.FONT_HERSHEY_SIMPLEX, 0.8, (0, 0, 255), 2)
        return vis


def paint_scanlines(
    image: np.ndarray,
    rows: Sequence[int],
    samples: Sequence[Sequence[Color]],
    palette: ColorPalette
) -> np.ndarray:
    """
    Copy of *image* with every scanline pixel replaced by its display color.
    
    Args:
        image: Source image (BGR)
        rows: Row index of each sample
        samples: Classified colors per scanline
        palette: Palette providing display colors
    
    Returns:
        New image; the input is not modified
    """
    vis = image.copy()
    lookup = {color: np.array(palette.display_color(color), dtype=np.uint8) for color in palette.colors}
    for row, sample in zip(rows, samples):
        for column, color in enumerate(sample):
            vis[row, column] = lookup[color]
    return vis
