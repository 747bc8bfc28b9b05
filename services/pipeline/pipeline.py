"""
Pipeline service for decoding resistor images.

Orchestrates: Scanline Sampling → Sequence Fusion → Background Removal → Decoding
"""

import logging
import numpy as np
from typing import Dict, Optional

from config.scan_config import RESISTOR_PALETTE
from services.color.classifier import BandClassifier
from services.color.palette import ColorPalette, color_name, get_palette
from services.interfaces import PipelineResult, ResistorData
from services.pipeline.steps.scanline_sampling import ScanlineSamplingService
from services.pipeline.steps.sequence_fusion import SequenceFusionService, agreement_width
from services.pipeline.steps.background_removal import remove_background
from services.pipeline.steps.resistor_decoding import (
    ResistorDecodingService,
    UndecodableBandPatternError,
    format_resistance
)
from services.utils.debug import DebugContext, paint_scanlines

logger = logging.getLogger(__name__)


class PipelineService:
    """
    Main pipeline service that decodes a resistor image.
    
    Pipeline: Image → Scanline Sampling → Sequence Fusion → Background Removal → Decoding
    """
    
    def __init__(
        self,
        palette: Optional[ColorPalette] = None,
        sampling_service: Optional[ScanlineSamplingService] = None,
        fusion_service: Optional[SequenceFusionService] = None,
        decoding_service: Optional[ResistorDecodingService] = None
    ):
        """
        Initialize pipeline service.
        
        Args:
            palette: Palette for classification (configured palette if not given)
            sampling_service: Optional pre-initialized service
            fusion_service: Optional pre-initialized service
            decoding_service: Optional pre-initialized service
        """
        if sampling_service is not None:
            self.palette = sampling_service.classifier.palette
        else:
            self.palette = palette or get_palette(RESISTOR_PALETTE)
        self.sampling_service = sampling_service or ScanlineSamplingService(BandClassifier(self.palette))
        self.fusion_service = fusion_service or SequenceFusionService()
        self.decoding_service = decoding_service or ResistorDecodingService()
    
    def process_image(
        self,
        image: np.ndarray,
        image_name: str = "unknown",
        debug: Optional[DebugContext] = None,
        visualize: bool = False
    ) -> PipelineResult:
        """
        Process image through full pipeline.
        
        Args:
            image: Input image (BGR format)
            image_name: Name of image for logging
            debug: Optional DebugContext for visual logging
            visualize: Attach the classified scanline image as 'visualization'
        
        Returns:
            Result dictionary with success status and data or error
        """
        # Step 1: Classify scanlines
        try:
            rows = self.sampling_service.rows_for(image)
            samples = self.sampling_service.sample(image)
        except (AttributeError, IndexError, ValueError) as e:
            logger.error(f'Invalid image {image_name}: {e}')
            return {
                'success': False,
                'error': f'Invalid image: {e}',
                'error_code': 'INVALID_IMAGE'
            }
        
        height, width = image.shape[:2]
        logger.info(f'{image_name}: width: {width}, height: {height}')
        
        painted = None
        if debug or visualize:
            painted = paint_scanlines(image, rows, samples, self.palette)
        
        if debug:
            debug.add_step(
                '01_scanlines',
                'Classified Scanlines',
                painted,
                {'rows': rows, 'palette': self.palette.name},
                f'Classified {width} columns on rows {rows} with {self.palette.name} palette'
            )
        
        # Step 2: Fuse scanlines into one band sequence
        fused = self.fusion_service.fuse(samples)
        min_run = agreement_width(width, self.fusion_service.agreement_ratio)
        fused_names = [color_name(c) for c in fused]
        logger.info(f'colors with background: {" ".join(fused_names)}')
        
        if debug:
            debug.add_step(
                '02_fused_sequence',
                'Fused Band Sequence',
                debug.visualize_bands(image, fused, self.palette, 'with background'),
                {'bands_with_background': fused_names, 'agreement_width': min_run}
            )
        
        # Step 3: Drop background segments
        bands = remove_background(fused)
        band_names = [color_name(c) for c in bands]
        logger.info(f'colors: {" ".join(band_names)}')
        
        # Step 4: Decode
        try:
            value = self.decoding_service.decode(bands)
        except UndecodableBandPatternError as e:
            if debug:
                debug.add_step(
                    '03_decode_failed',
                    'Decode Failed',
                    debug.visualize_error(image, str(e), 'UNDECODABLE_BAND_PATTERN'),
                    {'bands': band_names, 'error': str(e)}
                )
            failure: PipelineResult = {
                'success': False,
                'error': str(e),
                'error_code': 'UNDECODABLE_BAND_PATTERN',
                'bands': band_names
            }
            if visualize:
                failure['visualization'] = painted
            return failure
        
        data: ResistorData = {
            'resistance_ohms': value.resistance_ohms,
            'tolerance_percent': value.tolerance_percent,
            'resistance_display': format_resistance(value.resistance_ohms),
            'bands': band_names,
            'bands_with_background': fused_names,
            'scanline_rows': rows,
            'agreement_width': min_run,
            'palette': self.palette.name,
            'image': {'width': width, 'height': height}
        }
        
        if debug:
            label = f'{data["resistance_display"]} +/-{value.tolerance_percent}%'
            debug.add_step(
                '03_final_result',
                'Final Result',
                debug.visualize_bands(image, bands, self.palette, label),
                data,
                f'Decoded {len(bands)} bands: {label}'
            )
        
        result: PipelineResult = {
            'success': True,
            'data': data
        }
        if visualize:
            result['visualization'] = painted
        return result
