"""Core constants: environment variable names, defaults and GCS endpoints."""

# Environment overrides (take precedence over caller options)
ENV_BUCKET_NAME = "BACKEND_GCP_BUCKET_NAME"
ENV_PROJECT = "BACKEND_GCP_PROJECT"
ENV_CREDENTIALS_PATH = "BACKEND_GOOGLE_APPLICATION_CREDENTIALS_PATH"

# Backend options
DEFAULT_LOAD_PATH = "{{lng}}/{{ns}}.json"

# Google Cloud Storage JSON API
GCS_DEFAULT_ENDPOINT = "https://storage.googleapis.com"
GCS_API_PATH = "/storage/v1"
GCS_READ_ONLY_SCOPE = "https://www.googleapis.com/auth/devstorage.read_only"

# Retries for transient failures (transport errors, 408, 429, 5xx)
GCS_MAX_RETRIES = 4
GCS_RETRYABLE_STATUS_CODES = frozenset({408, 429})
GCS_RETRY_MAX_WAIT_SECONDS = 8.0
GCS_TIMEOUT_SECONDS = 30.0
