from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from api_doc_builder.cli import main
from api_doc_builder.generator.layout import Layout

FIXTURES = Path(__file__).parent / "fixtures"

META_ARGS = ["--title", "Petstore", "--subject", "Pets API", "--author", "Docs Team", "--doc-version", "1.0.0"]


class TestCliGenPdf:
    @patch("api_doc_builder.cli.PdfRenderer")
    def test_gen_pdf_with_swagger(self, MockRenderer, tmp_path):
        mock_renderer = MagicMock()
        MockRenderer.return_value = mock_renderer

        output_file = tmp_path / "api.pdf"
        runner = CliRunner()
        result = runner.invoke(main, ["gen-pdf", str(FIXTURES / "petstore.json"), "-o", str(output_file), *META_ARGS])

        assert result.exit_code == 0, result.output
        assert "Found 6 endpoints." in result.output
        mock_renderer.render.assert_called_once()
        layout, path = mock_renderer.render.call_args.args
        assert isinstance(layout, Layout)
        assert layout.meta.title == "Petstore"
        assert layout.meta.version == "1.0.0"
        assert path == output_file

    def test_gen_pdf_prompts_for_metadata(self, tmp_path):
        output_file = tmp_path / "api.pdf"
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["gen-pdf", str(FIXTURES / "petstore.json"), "-o", str(output_file)],
            input="My API\nAll endpoints\nJane\n2.1\n",
        )

        assert result.exit_code == 0, result.output
        assert "Document title" in result.output
        assert "API version" in result.output
        assert output_file.read_bytes().startswith(b"%PDF")

    def test_missing_input_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["gen-pdf", str(tmp_path / "nope.json"), "-o", str(tmp_path / "a.pdf"), *META_ARGS])

        assert result.exit_code == 1
        assert "file not found" in result.output

    def test_strict_rejects_missing_paths(self, tmp_path):
        doc = tmp_path / "empty.json"
        doc.write_text('{"swagger": "2.0"}', encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["gen-pdf", str(doc), "-o", str(tmp_path / "a.pdf"), "--strict", *META_ARGS])

        assert result.exit_code == 1
        assert "missing paths" in result.output

    def test_missing_paths_is_not_fatal_by_default(self, tmp_path):
        doc = tmp_path / "empty.json"
        doc.write_text('{"swagger": "2.0"}', encoding="utf-8")
        output_file = tmp_path / "a.pdf"
        runner = CliRunner()
        result = runner.invoke(main, ["gen-pdf", str(doc), "-o", str(output_file), *META_ARGS])

        assert result.exit_code == 0, result.output
        assert "Found 0 endpoints." in result.output
        assert output_file.exists()


class TestCliGenHtml:
    def test_gen_html(self, tmp_path):
        output_file = tmp_path / "site" / "index.html"
        runner = CliRunner()
        result = runner.invoke(main, ["gen-html", str(FIXTURES / "petstore.json"), "-o", str(output_file), "--title", "Petstore"])

        assert result.exit_code == 0, result.output
        page = output_file.read_text(encoding="utf-8")
        assert "<title>Petstore</title>" in page
        assert "x-internal-note" in page

    def test_gen_html_invalid_document(self, tmp_path):
        doc = tmp_path / "bad.json"
        doc.write_text("{not: [valid", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["gen-html", str(doc), "-o", str(tmp_path / "index.html"), "--title", "t"])

        assert result.exit_code == 1
        assert "invalid document" in result.output


class TestCliRun:
    @patch("api_doc_builder.cli.write_viewer")
    @patch("api_doc_builder.cli.PdfRenderer")
    def test_run_full_pipeline(self, MockRenderer, mock_write_viewer, tmp_path):
        output_dir = tmp_path / "output"
        mock_renderer = MagicMock()
        mock_renderer.render.return_value = output_dir / "api-docs.pdf"
        MockRenderer.return_value = mock_renderer
        mock_write_viewer.return_value = output_dir / "index.html"

        runner = CliRunner()
        result = runner.invoke(main, ["run", str(FIXTURES / "petstore.json"), "-o", str(output_dir), *META_ARGS])

        assert result.exit_code == 0, result.output
        assert output_dir.is_dir()
        mock_renderer.render.assert_called_once()
        assert mock_renderer.render.call_args.args[1] == output_dir / "api-docs.pdf"
        raw_text = (FIXTURES / "petstore.json").read_text(encoding="utf-8")
        mock_write_viewer.assert_called_once_with(output_dir / "index.html", "Petstore", raw_text)
