"""
AI Monitoring - structured logging of generation runs.
"""

from pagen.ai.monitoring.logger import GenerationLogger, generation_logger

__all__ = ["GenerationLogger", "generation_logger"]
