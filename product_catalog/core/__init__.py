"""Core infrastructure package for shared application functionality.

- **config**: Typed settings loaded from the environment
- **context**: Request-scoped correlation and request IDs
- **exceptions**: Error taxonomy with kinds, status codes and severities
- **error_context**: Redaction of sensitive data before logging
- **logging**: Loguru setup with console and JSON formatters
"""
