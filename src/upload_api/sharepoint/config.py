"""Microsoft Graph constants."""

GRAPH_API_ENDPOINT = "https://graph.microsoft.com/v1.0"
SCOPES = ["https://graph.microsoft.com/.default"]  # Scope for confidential client flow
AUTHORITY_TEMPLATE = "https://login.microsoftonline.com/{tenant_id}"
