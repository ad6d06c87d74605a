"""Upload API: direct and SharePoint file uploads stored in S3 with a local fallback."""
