"""Authentication helpers for Cloud Bigtable.

This module centralizes creation of the Bigtable admin client and
normalizes the resource ids users tend to paste in (for example
`projects/my-project/instances/my-instance` copied from the console).
"""

from google.api_core.client_info import ClientInfo
from google.auth.exceptions import DefaultCredentialsError
from google.cloud import bigtable

USER_AGENT = "hbschema"


class AuthError(RuntimeError):
    """Raised when Google Cloud credentials can not be resolved."""


def _format_auth_error(message: str) -> str:
    """Return a user-friendly auth error message."""
    return (
        f"Google Cloud authentication failed: {message}\n"
        "Set up application default credentials with:\n"
        "  $ gcloud auth application-default login"
    )


def sanitize_resource_id(value: str, collection: str) -> str:
    """
    Normalize a Bigtable project or instance id.

    - Strips surrounding whitespace and slashes
    - Keeps only the id when a full resource name is given
      (e.g. 'projects/p/instances/i' -> 'i' for collection 'instances')
    """
    value = value.strip().strip("/")
    parts = value.split("/")
    if collection in parts:
        idx = parts.index(collection)
        if idx + 1 < len(parts):
            return parts[idx + 1]
    return value


def get_bigtable_client(project_id: str) -> bigtable.Client:
    """
    Create a Bigtable client with table admin rights.

    Credentials are resolved through application default credentials
    (GOOGLE_APPLICATION_CREDENTIALS or the gcloud ADC file).
    """
    project_id = sanitize_resource_id(project_id, "projects")
    try:
        return bigtable.Client(
            project=project_id,
            admin=True,
            client_info=ClientInfo(user_agent=USER_AGENT),
        )
    except DefaultCredentialsError as exc:
        raise AuthError(_format_auth_error(str(exc))) from exc
