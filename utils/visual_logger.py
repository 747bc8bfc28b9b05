"""
Visual logging utilities for debugging scanline classification.
"""

import cv2
import numpy as np
import logging
import json
import re
from typing import Dict, Optional
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


def save_visualization(image: np.ndarray, output_path: str) -> str:
    """
    Write a single visualization image.
    
    Args:
        image: Image to write (BGR)
        output_path: Destination file; parent directories are created
    
    Returns:
        Path written
    
    Raises:
        ValueError: If OpenCV cannot encode the image to that path
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        written = cv2.imwrite(str(path), image)
    except cv2.error as e:
        raise ValueError(f'Failed to write visualization: {output_path}: {e}') from e
    if not written:
        raise ValueError(f'Failed to write visualization: {output_path}')
    logger.info(f'Visualization saved to: {path}')
    return str(path)


class VisualLogger:
    """Manages visual log creation and saving for debugging the scan pipeline."""
    
    def __init__(self, output_dir: Optional[str] = None):
        """
        Initialize visual logger.
        
        Args:
            output_dir: Base directory for saving logs. If None, uses experiments/
        """
        self.output_dir = output_dir or 'experiments'
        self.steps = []
        self.strategy_name = None
        self.image_name = None
    
    def start_log(self, strategy_name: str, image_name: str):
        """Start a new visual log for a run."""
        self.strategy_name = strategy_name
        self.image_name = image_name
        self.steps = []
    
    def add_step(
        self,
        step_name: str,
        description: str,
        image: np.ndarray,
        data: Optional[Dict] = None
    ):
        """
        Add a visualization step to the log.
        
        Args:
            step_name: Name of the step (used in filename)
            description: Human-readable description
            image: Annotated image for this step
            data: Additional debug data (band sequences, rows, values)
        """
        self.steps.append({
            'step_name': step_name,
            'description': description,
            'image': image.copy(),
            'data': data or {}
        })
    
    def save_log(self, final_visualization: np.ndarray) -> str:
        """
        Save visual log to disk.
        
        Args:
            final_visualization: Final annotated result image
            
        Returns:
            Path to saved log directory
        """
        if not self.strategy_name or not self.image_name:
            logger.warning('Cannot save log: strategy_name or image_name not set')
            return ''
        
        # Timestamped run names are used as-is, plain image names lose their extension
        if re.search(r'_\d{8}_\d{6}', self.image_name):
            image_base = self.image_name
        else:
            image_base = Path(self.image_name).stem
        log_dir = Path(self.output_dir) / image_base / self.strategy_name
        log_dir.mkdir(parents=True, exist_ok=True)
        
        for idx, step in enumerate(self.steps):
            step_filename = f'step_{idx:02d}_{step["step_name"]}.jpg'
            cv2.imwrite(str(log_dir / step_filename), step['image'])
        
        final_path = log_dir / 'final_result.jpg'
        cv2.imwrite(str(final_path), final_visualization)
        
        metadata = {
            'strategy_name': self.strategy_name,
            'image_name': self.image_name,
            'timestamp': datetime.now().isoformat(),
            'steps': [
                {
                    'step_name': step['step_name'],
                    'description': step['description'],
                    'image_file': f'step_{idx:02d}_{step["step_name"]}.jpg',
                    'data': step['data']
                }
                for idx, step in enumerate(self.steps)
            ],
            'final_image': 'final_result.jpg'
        }
        
        metadata_path = log_dir / 'log.json'
        with open(metadata_path, 'w') as f:
            json.dump(metadata, f, indent=2)
        
        logger.info(f'Visual log saved to: {log_dir}')
        return str(log_dir)
