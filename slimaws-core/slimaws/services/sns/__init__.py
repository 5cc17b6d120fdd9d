from slimaws.services.sns.client import SnsClient

__all__ = ["SnsClient"]
