import os

class Config:
    """Centralized configuration management"""
    JAEGER_QUERY_HOST = os.getenv("JAEGER_QUERY_HOST", "localhost")
    JAEGER_QUERY_PORT = os.getenv("JAEGER_QUERY_PORT", "16686")
    SERVICE_NAME = os.getenv("SERVICE_NAME", "frontend-service")  # Default central service
    PAST_INTERVAL = int(os.getenv("PAST_INTERVAL", "3600"))  # seconds = 1 hour
    TRACE_LIMIT = int(os.getenv("TRACE_LIMIT", "200"))  # traces fetched per extraction
    REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "10"))  # seconds
    OUTPUT_DIR = os.getenv("OUTPUT_DIR", "output/service_insights")

    # Span type matchers, names are comma separated
    EDGE_SERVICE_NAMES = os.getenv("EDGE_SERVICE_NAMES", "edge")
    GATEWAY_SERVICE_NAMES = os.getenv("GATEWAY_SERVICE_NAMES", "gateway")
    MESH_SERVICE_NAMES = os.getenv("MESH_SERVICE_NAMES", "service-mesh")
    DATABASE_TYPE_TAG = os.getenv("DATABASE_TYPE_TAG", "db.type")
    OUTBOUND_SPAN_KIND = os.getenv("OUTBOUND_SPAN_KIND", "client")

    @property
    def jaeger_endpoint(self):
        return f"http://{self.JAEGER_QUERY_HOST}:{self.JAEGER_QUERY_PORT}"
