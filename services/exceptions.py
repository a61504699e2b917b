"""
Error taxonomy for the gateway.
Every error carries the HTTP status it is reported with in the response envelope.
"""


class GatewayError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(GatewayError):
    """Malformed transaction signature or public key"""


class UpstreamError(GatewayError):
    """Explorer API or RPC node failed, or returned something unusable"""


class UpstreamTimeoutError(UpstreamError):
    status_code = 504


class ConfigError(GatewayError):
    """Missing or invalid configuration, raised at startup only"""
