"""Infrastructure modules for the streamer client.

Centralized infrastructure components:
- configuration: Settings management (Settings, RedisSettings, FailedMessagesSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- streams: Stream messages, the stream log interface and receivers
- resilience: Failed message storage and retries
- services: Application-scoped providers (get_settings, get_failed_messages_handler)
"""
