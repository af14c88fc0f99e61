from .health_schemas import HealthStatus, ComponentStatus, HealthCheckResponse

__all__ = ["HealthStatus", "ComponentStatus", "HealthCheckResponse"]
