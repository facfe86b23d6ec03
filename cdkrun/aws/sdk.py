# cdkrun/aws/sdk.py

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import boto3

from cdkrun.config import AWS_PROFILE, AWS_REGION


class IAwsSdk(ABC):
    """Factory for the boto3 clients a run needs."""

    @abstractmethod
    def cloudformation(self) -> Any: ...

    @abstractmethod
    def stepfunctions(self) -> Any: ...

    @abstractmethod
    def lambda_(self) -> Any: ...


class AwsSdk(IAwsSdk):
    def __init__(self, profile_name: Optional[str] = None, region_name: Optional[str] = None):
        self.session = boto3.Session(
            profile_name=profile_name or AWS_PROFILE,
            region_name=region_name or AWS_REGION,
        )
        self._clients: Dict[str, Any] = {}

    def _client(self, service: str):
        if service not in self._clients:
            self._clients[service] = self.session.client(service)
        return self._clients[service]

    def cloudformation(self):
        return self._client("cloudformation")

    def stepfunctions(self):
        return self._client("stepfunctions")

    def lambda_(self):
        return self._client("lambda")
