from .scan_pipeline import ScanPipeline, PipelineState

__all__ = ['ScanPipeline', 'PipelineState']
