from .cloudwatch_client import CloudWatchReporter

__all__ = ["CloudWatchReporter"]
