"""Tests for main.py CLI functionality."""

from unittest.mock import patch

import pytest

from image_variants.main import main


class TestMainCLI:
    """Tests for the main CLI functionality."""

    def test_main_with_no_args_shows_help(self):
        """Test that running main without arguments shows help."""
        with patch("sys.argv", ["image-variants"]):
            with patch("argparse.ArgumentParser.print_help") as mock_help:
                with patch("sys.exit") as mock_exit:
                    main()
                    mock_help.assert_called_once()
                    mock_exit.assert_called_once_with(1)

    def test_main_version_command(self):
        """Test version command output."""
        with patch("sys.argv", ["image-variants", "version"]):
            with patch("builtins.print") as mock_print:
                with patch("sys.exit") as mock_exit:
                    main()
                    mock_print.assert_any_call("Image Variants")
                    mock_print.assert_any_call("Version 0.1.0")
                    mock_print.assert_any_call(
                        "Resize and watermark service backed by S3 and DynamoDB"
                    )
                    mock_exit.assert_called_once_with(0)

    def test_serve_uses_environment(self, monkeypatch):
        """Test serve reads bind address and port from the environment."""
        monkeypatch.setenv("IMAGE_VARIANTS_BUCKET", "env-bucket")
        monkeypatch.setenv("LOCAL_SERVER_PORT", "7000")

        with patch("sys.argv", ["image-variants", "serve"]):
            with patch("image_variants.api.create_app") as mock_create_app:
                with patch("image_variants.main.uvicorn.run") as mock_run:
                    main()

        config = mock_create_app.call_args.kwargs["config"]
        assert config.bucket_name == "env-bucket"
        assert config.port == 7000
        mock_run.assert_called_once()
        assert mock_run.call_args.kwargs["port"] == 7000
        assert mock_run.call_args.kwargs["host"] == "0.0.0.0"

    def test_serve_command_line_overrides(self, monkeypatch, tmp_path):
        """Test command-line options take precedence over the environment."""
        monkeypatch.setenv("LOCAL_SERVER_PORT", "7000")
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        asset = tmp_path / "logo.png"
        test_args = [
            "image-variants",
            "serve",
            "--host",
            "127.0.0.1",
            "--port",
            "8080",
            "--watermark-asset",
            str(asset),
            "--static-dir",
            str(tmp_path),
            "--debug",
        ]

        with patch("sys.argv", test_args):
            with patch("image_variants.api.create_app") as mock_create_app:
                with patch("image_variants.main.uvicorn.run") as mock_run:
                    main()

        config = mock_create_app.call_args.kwargs["config"]
        assert config.host == "127.0.0.1"
        assert config.port == 8080
        assert config.watermark_asset_path == str(asset)
        assert config.static_dir == str(tmp_path)
        assert mock_run.call_args.kwargs["log_level"] == "debug"

    def test_serve_invalid_configuration_exits(self, monkeypatch):
        """Test an invalid environment stops the server before it starts."""
        monkeypatch.setenv("JPEG_QUALITY", "500")

        with patch("sys.argv", ["image-variants", "serve"]):
            with patch("image_variants.main.uvicorn.run") as mock_run:
                with pytest.raises(SystemExit) as exc_info:
                    main()

        assert exc_info.value.code == 2
        mock_run.assert_not_called()
