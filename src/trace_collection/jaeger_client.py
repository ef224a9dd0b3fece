import requests
import logging

from .config import Config

logger = logging.getLogger("jaeger-client")

class JaegerClient:
    def __init__(self, config: Config):
        self.config = config
        
    def fetch_traces(self, start_time: int, end_time: int, service_name: str = None,
                     limit: int = None) -> list:
        """Retrieve traces touching a service from Jaeger within a time range (microseconds)"""
        service = service_name or self.config.SERVICE_NAME
        
        params = {
            "service": service,
            "start": start_time,
            "end": end_time,
            "limit": limit or self.config.TRACE_LIMIT
        }
        
        url = f"{self.config.jaeger_endpoint}/api/traces"
        logger.info(f"Fetching traces from: {url}")
        logger.debug(f"Request params: {params}")
        
        try:
            response = requests.get(
                url,
                params=params,
                timeout=self.config.REQUEST_TIMEOUT
            )
            
            logger.debug(f"Response status: {response.status_code}")
            
            response.raise_for_status()
            
            json_data = response.json()
            traces = json_data.get("data") or []
            logger.info(f"Successfully fetched {len(traces)} traces from Jaeger")
            
            return traces
            
        except requests.RequestException as e:
            logger.error(f"Jaeger API error: {e}")
            logger.error(f"Failed request URL: {url}")
            logger.error(f"Failed request params: {params}")
            return []
