from transcription_ingestor.logging import setup_logging

__all__ = ["setup_logging"]
