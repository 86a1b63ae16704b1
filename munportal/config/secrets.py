import json
import logging

import boto3
from botocore.exceptions import ClientError
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


def get_secret(secret_name: str, region_name: str = "us-east-1") -> dict:
    """
    Reads a JSON secret (e.g. the database credentials) from AWS Secrets Manager.

    :param secret_name str: the name of the secret to get
    :param region_name: the name of the AWS region, defaults to us-east-1
    :return dict: the decoded SecretString
    :raises ImproperlyConfigured: if the secret cannot be read or is not JSON
    """
    session = boto3.session.Session()
    client = session.client(service_name="secretsmanager", region_name=region_name)
    try:
        response = client.get_secret_value(SecretId=secret_name)
    except ClientError as e:
        logger.error("Could not read secret %s: %s", secret_name, e)
        raise ImproperlyConfigured(f"Secret {secret_name} is not readable") from e

    try:
        return json.loads(response["SecretString"])
    except (KeyError, ValueError) as e:
        raise ImproperlyConfigured(f"Secret {secret_name} is not a JSON string") from e
