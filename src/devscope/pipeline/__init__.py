"""Scan pipeline orchestration."""

from devscope.pipeline.executor import PipelineExecutor, ScanMetadata, ScanOutcome

__all__ = ["PipelineExecutor", "ScanMetadata", "ScanOutcome"]
