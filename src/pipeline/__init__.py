"""
Pipeline Package

Entry points around the service insights graph builder: the command line
interface, the file and Jaeger pipelines and the HTTP API.
"""
