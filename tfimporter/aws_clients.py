from typing import Optional

import boto3

from tfimporter.config import config


def create_session(
    region: Optional[str] = None, profile: Optional[str] = None
) -> boto3.session.Session:
    """Builds the boto3 session every adapter creates its clients from.

    Credentials come from the standard boto3 chain.
    """
    return boto3.session.Session(
        region_name=region or config.aws_region,
        profile_name=profile or config.aws_profile,
    )
