from unittest.mock import patch, MagicMock
import pytest

from zonelink.factory import service_factory
from zonelink.base import DNSBlueprint, NetworkBlueprint, CredentialBrokerBlueprint
from zonelink.base.config import AWSConfig


class TestServiceFactory:
    @patch("zonelink.aws.dns.boto3")
    def test_dns(self, mock_boto):
        mock_boto.client.return_value = MagicMock()
        result = service_factory("dns", {
            "aws_access_key_id": "k",
            "aws_secret_access_key": "s",
            "region_name": "us-east-1",
        })
        assert isinstance(result, DNSBlueprint)
        mock_boto.client.assert_called_once()
        assert mock_boto.client.call_args[0] == ("route53",)

    @patch("zonelink.aws.network.boto3")
    def test_network(self, mock_boto):
        mock_boto.client.return_value = MagicMock()
        result = service_factory("network", AWSConfig(region_name="eu-west-1"))
        assert isinstance(result, NetworkBlueprint)
        assert mock_boto.client.call_args[1]["region_name"] == "eu-west-1"

    @patch("zonelink.aws.iam.boto3")
    def test_iam(self, mock_boto):
        mock_boto.client.return_value = MagicMock()
        result = service_factory("iam", {})
        assert isinstance(result, CredentialBrokerBlueprint)

    def test_unsupported_service(self):
        with pytest.raises(ValueError, match="Unsupported service"):
            service_factory("storage", {})
