from slimaws.services.rds_data.client import RdsDataClient

__all__ = ["RdsDataClient"]
