from tfimporter.config.tfimporter_config import TfImporterConfig

config = TfImporterConfig.load()
