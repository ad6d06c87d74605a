"""Thin wrappers around the boto3 S3 client used by the storage router."""
