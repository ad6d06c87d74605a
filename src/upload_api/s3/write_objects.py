"""Functions for writing objects to an S3 bucket--the "C" and "U" in CRUD."""

from typing import Optional
from urllib.parse import quote

import boto3
from botocore.exceptions import ClientError

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...


def create_s3_client(
    region_name: Optional[str] = None,
    endpoint_url: Optional[str] = None,
    aws_access_key_id: Optional[str] = None,
    aws_secret_access_key: Optional[str] = None,
) -> "S3Client":
    """
    Create an S3 client.

    Credentials left as ``None`` are resolved by the default boto3 chain
    (environment, shared config, or the Lambda execution role).
    """
    return boto3.client(
        "s3",
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_access_key_id=aws_access_key_id,
        aws_secret_access_key=aws_secret_access_key,
    )


def ensure_bucket(bucket_name: str, s3_client: "S3Client") -> None:
    """
    Create the bucket if it does not exist yet.

    Safe to call on every upload: an existing bucket owned by the caller is left untouched.

    :param bucket_name: The name of the S3 bucket.
    :param s3_client: A boto3 S3 client.
    """
    try:
        s3_client.head_bucket(Bucket=bucket_name)
        return
    except ClientError as err:
        error_code = err.response.get("Error", {}).get("Code")
        if error_code not in ("404", "NoSuchBucket", "NotFound"):
            raise

    region = s3_client.meta.region_name
    create_kwargs = {"Bucket": bucket_name}
    if region and region != "us-east-1":
        create_kwargs["CreateBucketConfiguration"] = {"LocationConstraint": region}

    try:
        s3_client.create_bucket(**create_kwargs)
    except ClientError as err:
        # lost a race with another request creating the same bucket
        if err.response.get("Error", {}).get("Code") != "BucketAlreadyOwnedByYou":
            raise


def upload_s3_object(
    bucket_name: str,
    object_key: str,
    file_content: bytes,
    s3_client: "S3Client",
    content_type: Optional[str] = None,
) -> None:
    """
    Upload a file to an S3 bucket.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param file_content: The content of the file to upload.
    :param s3_client: A boto3 S3 client.
    :param content_type: The MIME type of the file, e.g. "text/plain" for a text file.
    """
    content_type = content_type or "application/octet-stream"
    s3_client.put_object(
        Bucket=bucket_name,
        Key=object_key,
        Body=file_content,
        ContentType=content_type,
    )


def build_object_url(
    bucket_name: str,
    object_key: str,
    region_name: Optional[str] = None,
    endpoint_url: Optional[str] = None,
) -> str:
    """
    Build the URL of an object.

    Path-style against a custom endpoint (e.g. a local emulator), virtual-hosted style against AWS.
    """
    key = quote(object_key)
    if endpoint_url:
        return f"{endpoint_url.rstrip('/')}/{bucket_name}/{key}"
    region = region_name or "us-east-1"
    return f"https://{bucket_name}.s3.{region}.amazonaws.com/{key}"
