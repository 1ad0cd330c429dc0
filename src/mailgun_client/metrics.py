"""Prometheus metrics definitions for the Mailgun REST client."""

from prometheus_client import Counter, Histogram

# Counter metrics
mailgun_api_requests_total = Counter(
    "mailgun_api_requests_total",
    "Total number of Mailgun API requests",
    # outcome: success, missing_parameters, invalid_credentials, missing_endpoint,
    # http_error, transport_error
    ["method", "outcome"],
)

# Histogram metrics
mailgun_api_latency_seconds = Histogram(
    "mailgun_api_latency_seconds",
    "Mailgun API request latency in seconds",
    ["method"],
    buckets=(0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)
