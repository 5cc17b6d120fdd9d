from slimaws.services.scheduler.client import SchedulerClient

__all__ = ["SchedulerClient"]
