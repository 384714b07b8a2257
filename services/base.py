"""Base services container for dependency injection."""

from config import Config


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject fake collaborators for testing.

    Args:
        config: Application configuration object.
        importer_api: Optional importer procedures. Defaults to the lambda router.
        upload_api: Optional presign issuer. Defaults to the edge router.
        upload_transport: Optional upload transport. Defaults to the configured one.
        settings_store: Optional settings sink. Defaults to a YAML file store.
        id_factory: Optional unique id generator for staged uploads.
    """

    def __init__(
        self,
        config: Config,
        importer_api=None,
        upload_api=None,
        upload_transport=None,
        settings_store=None,
        id_factory=None,
    ):
        self.config = config

        # Lazy import to avoid circular dependencies
        from remote import ImporterApi, TrpcClient, UploadApi
        from transport import get_upload_transport
        from services.importer import ImportService
        from services.settings import YamlSettingsStore
        from services.uploader import ProgressUploader

        self.importer_api = importer_api or ImporterApi(TrpcClient(config.lambda_url))
        self.upload_api = upload_api or UploadApi(TrpcClient(config.edge_url))
        self.uploader = ProgressUploader(
            upload_transport or get_upload_transport(config)
        )
        self.settings = settings_store or YamlSettingsStore(config.settings_path)

        self.imports = ImportService(
            importer_api=self.importer_api,
            upload_api=self.upload_api,
            uploader=self.uploader,
            settings_store=self.settings,
            id_factory=id_factory,
            report_transfer_errors=config.report_transfer_errors,
        )
