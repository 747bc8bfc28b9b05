"""
Pipeline services for resistor image decoding.

Main orchestrator: PipelineService
Pipeline steps: ScanlineSamplingService, SequenceFusionService, remove_background, ResistorDecodingService
"""

from services.pipeline.pipeline import PipelineService

__all__ = ['PipelineService']
