"""Pipeline orchestrator: decode, derive, store artifacts and lineage records."""

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from PIL import Image

from .config import ServiceConfig, watermark_asset_key
from .exceptions import (
    ConfigurationError,
    ImageVariantsError,
    NotFoundError,
    ValidationError,
    with_error_handling,
)
from .image_utils import (
    add_watermark,
    content_type_for,
    decode_base64_image,
    decode_image,
    encode_image,
    resize_to_width,
)
from .models import ArtifactKind, ArtifactRecord, OperationResult, SizeLabel, StoredArtifact
from .observability import LogContext, log_operation_end, log_operation_start
from .protocols import ArtifactStore, LoggerProtocol, MetadataStore

ASSET_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def original_key(image_id: str) -> str:
    return f"{image_id}.jpg"


def resized_key(image_id: str, size_label: SizeLabel) -> str:
    return f"resized/{size_label.value}_{image_id}.jpg"


def watermarked_key(image_id: str, size_label: SizeLabel) -> str:
    return f"watermarked/{size_label.value}_watermarked_{image_id}.jpg"


def parse_size_label(value: str) -> SizeLabel:
    """
    Parse a size label from request input.

    Raises:
        ValidationError: If the value is not small, medium or large
    """
    try:
        return SizeLabel(value.lower())
    except (ValueError, AttributeError):
        allowed = ", ".join(label.value for label in SizeLabel)
        raise ValidationError(f"Unknown size '{value}', expected one of: {allowed}")


def timestamp_id_factory(tz_name: str) -> Callable[[], str]:
    """Build the default ``image_<YYYYmmdd_HHMMSS>`` id generator."""
    if tz_name.upper() == "UTC":
        tz = timezone.utc
    else:
        try:
            tz = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigurationError(f"Unknown timezone '{tz_name}'") from exc

    def make_id() -> str:
        return f"image_{datetime.now(tz).strftime('%Y%m%d_%H%M%S')}"

    return make_id


def _require(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


class VariantPipeline:
    """
    Derives size and watermark variants of uploaded images.

    Every public operation runs synchronously, writes the artifact before its
    lineage record, and returns an OperationResult for the caller alone.
    """

    def __init__(
        self,
        artifact_store: ArtifactStore,
        metadata_store: MetadataStore,
        logger: LoggerProtocol,
        config: Optional[ServiceConfig] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._artifacts = artifact_store
        self._metadata = metadata_store
        self._logger = logger
        self._config = config or ServiceConfig()
        self._id_factory = id_factory or timestamp_id_factory(self._config.timezone)

    @property
    def config(self) -> ServiceConfig:
        return self._config

    def _context(self, image_id: Optional[str] = None, **metadata: object) -> LogContext:
        return LogContext(image_id=image_id, metadata=dict(metadata))

    def _store(self, key: str, image: Image.Image, format_type: str = "JPEG") -> str:
        data = encode_image(image, format_type, quality=self._config.jpeg_quality)
        return self._artifacts.put(key, data, content_type_for(format_type))

    def _run(
        self,
        operation: str,
        context: LogContext,
        func: Callable[[LogContext], OperationResult],
    ) -> OperationResult:
        op_context = log_operation_start(operation, self._logger, context)
        try:
            result = with_error_handling(func)(op_context)
        except ImageVariantsError as exc:
            log_operation_end(
                operation, self._logger, op_context, success=False, error_message=str(exc)
            )
            raise
        log_operation_end(operation, self._logger, op_context, path=result.path)
        return result

    def upload(self, base64_image: Optional[str]) -> OperationResult:
        """Store a new original image and its root lineage record."""
        payload = _require(base64_image, "base64image")
        image_id = self._id_factory()

        def _upload(context: LogContext) -> OperationResult:
            image = decode_image(decode_base64_image(payload))
            self._logger.debug(
                f"Image decoded: format={image.format}, size={image.width}x{image.height}",
                context,
            )
            path = self._store(original_key(image_id), image)
            record = ArtifactRecord.original(image_id, path)
            self._metadata.put_record(record)
            return OperationResult(
                status=f"{image_id} uploaded successfully",
                image_id=image_id,
                path=path,
                records={record.document_path: path},
            )

        return self._run("upload", self._context(image_id), _upload)

    def resize(self, image_id: Optional[str], size_label: SizeLabel) -> OperationResult:
        """Derive a fixed-width variant of an uploaded original."""
        image_id = _require(image_id, "imageID")

        def _resize(context: LogContext) -> OperationResult:
            parent = self._metadata.get_record(image_id, ArtifactKind.ORIGINAL)
            source = decode_image(self._artifacts.get(parent.storage_path).body)

            target_width = self._config.target_widths.for_label(size_label)
            resized = resize_to_width(source, target_width)
            self._logger.debug(
                f"Resized {source.width}x{source.height} -> {resized.width}x{resized.height}",
                context,
            )

            path = self._store(resized_key(image_id, size_label), resized)
            record = ArtifactRecord.resized(image_id, size_label, path)
            self._metadata.put_record(record)
            return OperationResult(
                status=f"{image_id} resized to {size_label.value} successfully",
                image_id=image_id,
                path=path,
                records={record.document_path: path},
            )

        return self._run("resize", self._context(image_id, size=size_label.value), _resize)

    def watermark(self, image_id: Optional[str], size_label: SizeLabel) -> OperationResult:
        """Tile the configured watermark over an existing resized variant."""
        image_id = _require(image_id, "imageID")

        def _watermark(context: LogContext) -> OperationResult:
            parent = self._metadata.get_record(image_id, ArtifactKind.RESIZED, size_label)
            base = decode_image(self._artifacts.get(parent.storage_path).body)
            watermark = self.load_watermark()

            composed = add_watermark(
                base,
                watermark,
                alpha=self._config.watermark_alpha,
                width_fraction=self._config.watermark_width_fraction,
            )

            key = watermarked_key(image_id, size_label)
            path = self._store(key, composed)
            record = ArtifactRecord.watermarked(image_id, size_label, path)
            self._metadata.put_record(record)
            return OperationResult(
                status=f"{size_label.value}_watermarked_{image_id}.jpg saved successfully",
                image_id=image_id,
                path=path,
                records={record.document_path: path},
            )

        return self._run(
            "watermark", self._context(image_id, size=size_label.value), _watermark
        )

    def ensure_watermark(self, image_id: Optional[str], size_label: SizeLabel) -> OperationResult:
        """
        Watermark a size variant, producing the resized variant first if needed.

        A missing resized record triggers a resize before the watermark step.
        If the watermark step still reports a missing record or artifact, and no
        resize ran yet, the resize is run and the watermark retried once.

        Raises:
            ImageVariantsError: With ``step`` set to ``resize`` or ``watermark``
        """
        image_id = _require(image_id, "imageID")
        context = self._context(image_id, size=size_label.value)
        resize_result: Optional[OperationResult] = None

        has_resized = with_error_handling(self._metadata.has_record)
        if not has_resized(image_id, ArtifactKind.RESIZED, size_label):
            self._logger.info("Resized variant missing, resizing first", context)
            resize_result = self._resize_step(image_id, size_label)

        try:
            result = self.watermark(image_id, size_label)
        except NotFoundError as exc:
            if resize_result is not None:
                raise exc.with_step("watermark")
            self._logger.warning(
                f"Watermark failed ({exc}), resizing and retrying once", context
            )
            resize_result = self._resize_step(image_id, size_label)
            result = self._watermark_step(image_id, size_label)
        except ImageVariantsError as exc:
            if resize_result is None:
                raise
            raise exc.with_step("watermark")

        if resize_result is None:
            return result

        return OperationResult(
            status=(
                f"{image_id} resized to {size_label.value} and watermarked successfully"
            ),
            image_id=image_id,
            path=result.path,
            fallback_used=True,
            records={**resize_result.records, **result.records},
        )

    def _resize_step(self, image_id: str, size_label: SizeLabel) -> OperationResult:
        try:
            return self.resize(image_id, size_label)
        except ImageVariantsError as exc:
            raise exc.with_step("resize")

    def _watermark_step(self, image_id: str, size_label: SizeLabel) -> OperationResult:
        try:
            return self.watermark(image_id, size_label)
        except ImageVariantsError as exc:
            raise exc.with_step("watermark")

    def fetch_variant(self, image_id: str, size_label: SizeLabel) -> StoredArtifact:
        """Bytes of a resized variant."""
        return self._fetch(image_id, ArtifactKind.RESIZED, size_label)

    def fetch_watermarked(self, image_id: str, size_label: SizeLabel) -> StoredArtifact:
        """Bytes of a watermarked variant."""
        return self._fetch(image_id, ArtifactKind.WATERMARKED, size_label)

    @with_error_handling
    def _fetch(
        self, image_id: str, kind: ArtifactKind, size_label: SizeLabel
    ) -> StoredArtifact:
        record = self._metadata.get_record(image_id, kind, size_label)
        return self._artifacts.get(record.storage_path)

    def load_watermark(self) -> Image.Image:
        """
        Load the configured watermark asset from the artifact store.

        Raises:
            NotFoundError: If no asset with the configured name was provisioned
        """
        try:
            artifact = self._artifacts.get(self._config.watermark_asset_key)
        except NotFoundError as exc:
            raise NotFoundError(
                f"Watermark asset '{self._config.watermark_asset_name}' has not been provisioned"
            ) from exc
        return decode_image(artifact.body)

    def upload_watermark_asset(
        self, base64_image: Optional[str], name: Optional[str]
    ) -> OperationResult:
        """Provision a watermark image under ``name``."""
        name = _require(name, "Image name")
        if not ASSET_NAME_PATTERN.match(name):
            raise ValidationError(f"Invalid image name '{name}'")
        payload = _require(base64_image, "base64image")

        def _provision(context: LogContext) -> OperationResult:
            image = decode_image(decode_base64_image(payload))
            return self._save_watermark_asset(name, image)

        return self._run(
            "upload_watermark_asset", self._context(asset=name), _provision
        )

    def provision_watermark_from_file(self, path: str) -> OperationResult:
        """Seed the configured watermark asset from a local image file."""
        asset_path = Path(path)
        if not asset_path.is_file():
            raise ConfigurationError(f"Watermark asset file not found: {path}")
        image = decode_image(asset_path.read_bytes())
        return self._save_watermark_asset(self._config.watermark_asset_name, image)

    def _save_watermark_asset(self, name: str, image: Image.Image) -> OperationResult:
        path = self._store(watermark_asset_key(name), image.convert("RGBA"), "PNG")
        record = ArtifactRecord.watermark_asset(name, path)
        self._metadata.put_record(record)
        return OperationResult(
            status=f"Watermark image {name} uploaded successfully",
            path=path,
            records={record.document_path: path},
        )
