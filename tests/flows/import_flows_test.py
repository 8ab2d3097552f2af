import os
import tempfile
import unittest
from unittest import mock

from tfimporter import exceptions
from tfimporter.flows import import_flows
from tfimporter.models.resource import ImportResult, ResourceInfo, resource
from tfimporter.testing import FakeAdapter, client_error


def _role_results():
    return [
        ImportResult(
            name="admin",
            resource=resource("aws_iam_role", "admin", {"name": "admin"}),
        ),
        ImportResult(
            name="admin/arn:aws:iam::aws:policy/ReadOnlyAccess",
            resource=resource(
                "aws_iam_role_policy_attachment",
                "admin-ReadOnlyAccess",
                {
                    "role": "admin",
                    "policy_arn": "arn:aws:iam::aws:policy/ReadOnlyAccess",
                },
            ),
        ),
    ]


class ImportFlowsTest(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.output_dir = self.temp_dir.name
        self.registry = {
            "aws_iam_role": FakeAdapter(
                "aws_iam_role", import_results={"admin": _role_results()}
            )
        }
        self.tf_import_command_patch = mock.patch(
            "tfimporter.flows.import_flows.TFImportCommand"
        )
        self.tf_import_command_mock = self.tf_import_command_patch.start()
        self.run_mock = mock.AsyncMock(return_value="Import successful!")
        self.tf_import_command_mock.return_value.run = self.run_mock

    def tearDown(self):
        self.tf_import_command_patch.stop()
        self.temp_dir.cleanup()

    def _path(self, filename: str) -> str:
        return os.path.join(self.output_dir, filename)

    async def test_import_all_writes_and_adopts_every_result_in_order(self):
        report = await import_flows.import_all(
            [ResourceInfo(resource_type="aws_iam_role", identifier="admin")],
            self.registry,
            output_dir=self.output_dir,
            state_tool="tofu",
        )

        self.assertEqual(2, len(report.committed))
        self.assertEqual([], report.failed)
        self.assertTrue(os.path.exists(self._path("aws_iam_role.admin.tf")))
        self.assertTrue(
            os.path.exists(
                self._path(
                    "aws_iam_role_policy_attachment.admin-ReadOnlyAccess.tf"
                )
            )
        )
        self.tf_import_command_mock.assert_has_calls(
            [
                mock.call(
                    state_tool="tofu",
                    working_dir=self.output_dir,
                    resource="aws_iam_role.admin",
                    resource_id="admin",
                ),
                mock.call().run(),
                mock.call(
                    state_tool="tofu",
                    working_dir=self.output_dir,
                    resource="aws_iam_role_policy_attachment.admin-ReadOnlyAccess",
                    resource_id="admin/arn:aws:iam::aws:policy/ReadOnlyAccess",
                ),
                mock.call().run(),
            ]
        )

    async def test_failed_commit_removes_file_and_continues(self):
        self.run_mock.side_effect = [
            "Import successful!",
            exceptions.AdoptionFailure(
                "aws_iam_role_policy_attachment.admin-ReadOnlyAccess", 1, "Error!"
            ),
        ]

        with self.assertLogs("tfimporter", level="ERROR") as logs:
            report = await import_flows.import_all(
                [ResourceInfo(resource_type="aws_iam_role", identifier="admin")],
                self.registry,
                output_dir=self.output_dir,
                state_tool="terraform",
                verbose=False,
            )

        self.assertTrue(os.path.exists(self._path("aws_iam_role.admin.tf")))
        self.assertEqual(["aws_iam_role.admin.tf"], os.listdir(self.output_dir))
        self.assertEqual(1, len(report.committed))
        self.assertEqual(1, len(report.failed))
        self.assertIsNone(report.failed[0].path)
        self.assertEqual(1, len(logs.records))
        self.assertIn("Failed to import", logs.output[0])

    async def test_failed_commit_in_verbose_mode_keeps_error_file(self):
        self.run_mock.side_effect = exceptions.AdoptionFailure(
            "aws_iam_role.admin", 1, "Error: Cannot import non-existent remote object"
        )
        self.registry["aws_iam_role"].import_results = {}

        with self.assertLogs("tfimporter", level="ERROR") as logs:
            report = await import_flows.import_all(
                [ResourceInfo(resource_type="aws_iam_role", identifier="admin")],
                self.registry,
                output_dir=self.output_dir,
                state_tool="terraform",
                verbose=True,
            )

        self.assertFalse(os.path.exists(self._path("aws_iam_role.admin.tf")))
        self.assertTrue(os.path.exists(self._path("aws_iam_role.admin.tf.error")))
        self.assertEqual(
            self._path("aws_iam_role.admin.tf.error"), report.failed[0].path
        )
        self.assertIn("non-existent remote object", "\n".join(logs.output))

    async def test_file_is_written_before_the_import_runs(self):
        written = []

        async def check_file_exists():
            written.append(os.path.exists(self._path("aws_iam_role.admin.tf")))
            return ""

        self.run_mock.side_effect = check_file_exists
        self.registry["aws_iam_role"].import_results = {}

        await import_flows.import_all(
            [ResourceInfo(resource_type="aws_iam_role", identifier="admin")],
            self.registry,
            output_dir=self.output_dir,
            state_tool="terraform",
        )

        self.assertEqual([True], written)

    async def test_colliding_names_get_distinct_files(self):
        registry = {"aws_s3_bucket": FakeAdapter("aws_s3_bucket")}
        self.run_mock.side_effect = [
            "Import successful!",
            exceptions.AdoptionFailure("aws_s3_bucket.my_bucket_2", 1, "Error!"),
        ]

        with self.assertLogs("tfimporter", level="WARNING"):
            report = await import_flows.import_all(
                [
                    ResourceInfo(resource_type="aws_s3_bucket", identifier="my.bucket"),
                    ResourceInfo(resource_type="aws_s3_bucket", identifier="my_bucket"),
                ],
                registry,
                output_dir=self.output_dir,
                state_tool="terraform",
            )

        self.assertEqual(
            ["aws_s3_bucket.my_bucket", "aws_s3_bucket.my_bucket_2"],
            [outcome.result.resource.address for outcome in report.outcomes],
        )
        self.assertEqual(1, len(report.committed))
        self.assertEqual(1, len(report.failed))
        self.assertTrue(os.path.exists(report.committed[0].path))
        self.assertEqual(["aws_s3_bucket.my_bucket.tf"], os.listdir(self.output_dir))
        self.tf_import_command_mock.assert_has_calls(
            [
                mock.call(
                    state_tool="terraform",
                    working_dir=self.output_dir,
                    resource="aws_s3_bucket.my_bucket",
                    resource_id="my.bucket",
                ),
                mock.call().run(),
                mock.call(
                    state_tool="terraform",
                    working_dir=self.output_dir,
                    resource="aws_s3_bucket.my_bucket_2",
                    resource_id="my_bucket",
                ),
                mock.call().run(),
            ]
        )

    async def test_existing_file_is_left_alone(self):
        existing_path = self._path("aws_iam_role.admin.tf")
        with open(existing_path, "w") as f:
            f.write("# managed by hand\n")
        self.registry["aws_iam_role"].import_results = {}

        with self.assertLogs("tfimporter", level="ERROR") as logs:
            report = await import_flows.import_all(
                [ResourceInfo(resource_type="aws_iam_role", identifier="admin")],
                self.registry,
                output_dir=self.output_dir,
                state_tool="terraform",
                verbose=True,
            )

        with open(existing_path) as f:
            self.assertEqual("# managed by hand\n", f.read())
        self.assertEqual(["aws_iam_role.admin.tf"], os.listdir(self.output_dir))
        self.assertEqual(1, len(report.failed))
        self.assertIsNone(report.failed[0].path)
        self.assertIsInstance(report.failed[0].error, exceptions.ArtifactAlreadyExists)
        self.assertIn("Refusing to overwrite", logs.output[0])
        self.run_mock.assert_not_called()

    async def test_existing_file_does_not_stop_the_batch(self):
        with open(self._path("aws_iam_role.admin.tf"), "w") as f:
            f.write("# managed by hand\n")

        report = await import_flows.import_all(
            [ResourceInfo(resource_type="aws_iam_role", identifier="admin")],
            self.registry,
            output_dir=self.output_dir,
            state_tool="terraform",
        )

        self.assertEqual(1, len(report.failed))
        self.assertEqual(
            ["aws_iam_role_policy_attachment.admin-ReadOnlyAccess"],
            [outcome.result.resource.address for outcome in report.committed],
        )
        self.run_mock.assert_called_once()

    async def test_import_one_aborts_when_remote_resource_is_gone(self):
        registry = {
            "role": FakeAdapter("role", import_error=client_error("NoSuchEntity"))
        }

        with self.assertRaises(exceptions.ImportResolveFailure) as context:
            await import_flows.import_one(
                "role/admin",
                registry,
                output_dir=self.output_dir,
                state_tool="terraform",
            )

        self.assertIn("role/admin", str(context.exception))
        self.assertIsInstance(
            context.exception.cause, exceptions.RemoteResourceNotFound
        )
        self.assertEqual([], os.listdir(self.output_dir))
        self.run_mock.assert_not_called()

    async def test_resolve_failure_aborts_before_any_commit(self):
        registry = {
            "bucket": FakeAdapter("bucket"),
            "role": FakeAdapter("role", import_error=client_error("Throttling")),
        }

        with self.assertRaises(exceptions.ImportResolveFailure) as context:
            await import_flows.import_all(
                [
                    ResourceInfo(resource_type="bucket", identifier="my-bucket"),
                    ResourceInfo(resource_type="role", identifier="admin"),
                ],
                registry,
                output_dir=self.output_dir,
                state_tool="terraform",
            )

        self.assertIsInstance(
            context.exception.cause, exceptions.ResourceImportFailure
        )
        self.assertEqual(["my-bucket"], registry["bucket"].import_calls)
        self.assertEqual([], os.listdir(self.output_dir))

    async def test_unregistered_type_fails_fast(self):
        with self.assertRaises(exceptions.UnregisteredResourceType):
            await import_flows.import_one(
                "aws_lambda_function/handler",
                self.registry,
                output_dir=self.output_dir,
                state_tool="terraform",
            )
        self.assertEqual([], self.registry["aws_iam_role"].import_calls)

    async def test_missing_identifier_fails_fast(self):
        with self.assertRaises(exceptions.MissingIdentifier):
            await import_flows.import_all(
                [
                    ResourceInfo(resource_type="aws_iam_role", identifier="admin"),
                    ResourceInfo(resource_type="aws_iam_role", identifier=None),
                ],
                self.registry,
                output_dir=self.output_dir,
                state_tool="terraform",
            )
        self.assertEqual([], os.listdir(self.output_dir))

    async def test_import_one_rejects_invalid_reference(self):
        with self.assertRaises(exceptions.InvalidResourceReference):
            await import_flows.import_one(
                "aws_iam_role",
                self.registry,
                output_dir=self.output_dir,
                state_tool="terraform",
            )


if __name__ == "__main__":
    unittest.main()
