"""Infrastructure modules for the subscription reminder service.

Centralized infrastructure components:
- configuration: Settings management (Settings, get_settings)
- logging: Structured logging (get_module_logger, bind_request_context)
- operations: Operation results and error classification
- storage: Durable key-value store backends
- cache: In-process TTL cache
- ratelimit: Fixed-window rate limiter
- notifications: Reminder routing, delivery and failure log
- services: Dependency injection services (SettingsDep, NotificationServiceDep)
"""
