import unittest

import boto3
from moto.core.decorator import mock_aws

from tfimporter import exceptions
from tfimporter.descriptors.route53 import HostedZoneAdapter
from tfimporter.models.state import TrackedInstance


class HostedZoneAdapterTest(unittest.TestCase):
    def setUp(self):
        self.mock_aws = mock_aws()
        self.mock_aws.start()
        self.session = boto3.session.Session(region_name="eu-west-1")
        response = self.session.client("route53").create_hosted_zone(
            Name="example.com",
            CallerReference="tfimporter-test",
            HostedZoneConfig={"Comment": "main zone"},
        )
        self.zone_id = response["HostedZone"]["Id"].split("/")[-1]
        self.adapter = HostedZoneAdapter(self.session)

    def tearDown(self):
        self.mock_aws.stop()

    def test_fetch_and_describe(self):
        items = self.adapter.fetch()

        self.assertEqual(1, len(items))
        self.assertEqual(self.zone_id, self.adapter.describe(items[0]).identifier)

    def test_describe_without_id(self):
        self.assertIsNone(self.adapter.describe({"Name": "example.com."}).identifier)

    def test_matches_ignores_trailing_dot(self):
        item = {"Id": f"/hostedzone/{self.zone_id}", "Name": "example.com."}

        self.assertTrue(
            self.adapter.matches(
                item, TrackedInstance(attributes={"name": "example.com"})
            )
        )
        self.assertFalse(
            self.adapter.matches(
                item, TrackedInstance(attributes={"name": "example.org"})
            )
        )
        self.assertFalse(
            self.adapter.matches(item, TrackedInstance(attributes={"name": None}))
        )

    def test_do_import(self):
        results = self.adapter.do_import(self.zone_id)

        self.assertEqual(1, len(results))
        self.assertEqual(self.zone_id, results[0].name)
        self.assertEqual("aws_route53_zone.example_com", results[0].resource.address)
        self.assertEqual(
            {"name": "example.com", "comment": "main zone"},
            results[0].resource.attributes,
        )

    def test_do_import_deleted_zone(self):
        with self.assertRaises(exceptions.RemoteResourceNotFound):
            self.adapter.do_import("Z0000000000000000000")


if __name__ == "__main__":
    unittest.main()
