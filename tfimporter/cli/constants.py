STATE_FILE_HELP = "Path to the terraform state file. Defaults to `terraform.tfstate` in the current working directory."
OUTPUT_DIR_HELP = "Directory the generated `.tf` files are written to and the import command runs in. Defaults to the current working directory."
STATE_TOOL_HELP = "The binary used to import resources into state, i.e. `terraform` or `tofu`."
RESOURCE_REF_HELP = "The resource to import in the format `<type>/<identifier>`, i.e. `aws_iam_role/admin`."
VERBOSE_HELP = "Keep the generated file of a failed import with an `.error` suffix and print the output of the import command."
LOG_LEVEL_HELP = "Log level of the tool, i.e. `DEBUG` or `ERROR`. Defaults to `WARNING`."
