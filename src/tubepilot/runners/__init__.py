"""Entry points that wire concrete clients into the pipeline."""

from tubepilot.runners.pipeline_runner import PipelineRunner, run_topic

__all__ = ["PipelineRunner", "run_topic"]
