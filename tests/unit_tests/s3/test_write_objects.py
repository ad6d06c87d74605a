from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from upload_api.s3.write_objects import (
    build_object_url,
    ensure_bucket,
    upload_s3_object,
)
from tests.consts import (
    TEST_BUCKET_NAME,
    TEST_FILE_CONTENT,
    TEST_FILE_CONTENT_TYPE,
)


def test_ensure_bucket__creates_missing_bucket(s3_client):
    ensure_bucket(TEST_BUCKET_NAME, s3_client)

    buckets = [bucket["Name"] for bucket in s3_client.list_buckets()["Buckets"]]
    assert buckets == [TEST_BUCKET_NAME]


def test_ensure_bucket__is_idempotent(s3_client):
    ensure_bucket(TEST_BUCKET_NAME, s3_client)
    ensure_bucket(TEST_BUCKET_NAME, s3_client)

    assert len(s3_client.list_buckets()["Buckets"]) == 1


def test_ensure_bucket__propagates_access_errors():
    client = MagicMock()
    client.head_bucket.side_effect = ClientError({"Error": {"Code": "403", "Message": "Forbidden"}}, "HeadBucket")

    with pytest.raises(ClientError):
        ensure_bucket(TEST_BUCKET_NAME, client)
    client.create_bucket.assert_not_called()


def test_ensure_bucket__tolerates_concurrent_creation():
    client = MagicMock()
    client.meta.region_name = "us-east-1"
    client.head_bucket.side_effect = ClientError({"Error": {"Code": "404", "Message": "Not Found"}}, "HeadBucket")
    client.create_bucket.side_effect = ClientError(
        {"Error": {"Code": "BucketAlreadyOwnedByYou", "Message": "owned"}}, "CreateBucket"
    )

    ensure_bucket(TEST_BUCKET_NAME, client)


def test_ensure_bucket__sets_location_outside_us_east_1():
    client = MagicMock()
    client.meta.region_name = "eu-west-1"
    client.head_bucket.side_effect = ClientError({"Error": {"Code": "404", "Message": "Not Found"}}, "HeadBucket")

    ensure_bucket(TEST_BUCKET_NAME, client)

    client.create_bucket.assert_called_once_with(
        Bucket=TEST_BUCKET_NAME,
        CreateBucketConfiguration={"LocationConstraint": "eu-west-1"},
    )


def test_upload_s3_object__stores_content_type(s3_client):
    s3_client.create_bucket(Bucket=TEST_BUCKET_NAME)

    upload_s3_object(TEST_BUCKET_NAME, "a/b.txt", TEST_FILE_CONTENT, s3_client, content_type=TEST_FILE_CONTENT_TYPE)

    stored = s3_client.get_object(Bucket=TEST_BUCKET_NAME, Key="a/b.txt")
    assert stored["ContentType"] == TEST_FILE_CONTENT_TYPE
    assert stored["Body"].read() == TEST_FILE_CONTENT


def test_build_object_url__aws():
    url = build_object_url(TEST_BUCKET_NAME, "abc-my report.pdf", region_name="eu-west-1")
    assert url == f"https://{TEST_BUCKET_NAME}.s3.eu-west-1.amazonaws.com/abc-my%20report.pdf"


def test_build_object_url__custom_endpoint():
    url = build_object_url(TEST_BUCKET_NAME, "abc-file.txt", endpoint_url="http://localhost:5000")
    assert url == f"http://localhost:5000/{TEST_BUCKET_NAME}/abc-file.txt"
