"""
Tests for the client approval package (CSV + markdown summary + images).
"""

import io
import zipfile
from datetime import date, datetime, timezone

from PIL import Image

from adcraft_app import wizard
from adcraft_app.csv_export import EXPORT_FILENAME, build_csv
from adcraft_app.export_package import (
    SUMMARY_FILENAME,
    build_export_zip,
    build_markdown_summary,
    export_zip_filename,
    image_filenames,
)
from adcraft_app.image_gen import to_data_url
from adcraft_app.models import CampaignState

TODAY = date(2026, 10, 19)


def _png_data_url(color=(255, 0, 0)):
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color).save(buf, format="PNG")
    return to_data_url(buf.getvalue())


class TestMarkdownSummary:

    def test_contains_campaign_details(self, campaign):
        md = build_markdown_summary(campaign, TODAY)

        assert md.startswith("# Search - Acme Plumbing - 2026-10-19")
        assert "- Location: London, UK" in md
        assert "- Currency: GBP (£)" in md
        assert "## Keywords (3 selected)" in md
        assert "| emergency plumber | Generic | 5400 | £6.50 | 80 |" in md
        assert "| boiler repair |" not in md
        assert "### 1. Brand - Acme" in md
        assert "- Call Acme Today" in md
        assert "**Callouts:**" in md

    def test_empty_campaign(self):
        md = build_markdown_summary(CampaignState(), TODAY)

        assert "_No summary available._" in md
        assert "_No keywords selected._" in md
        assert "_No ad groups._" in md


class TestExportZip:

    def test_bundles_csv_summary_and_images(self, campaign):
        state = wizard.set_generated_image(campaign, "group-brand", _png_data_url())

        data = build_export_zip(state, TODAY)

        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            names = set(zf.namelist())
            assert names == {EXPORT_FILENAME, SUMMARY_FILENAME, "images/brand-acme.png"}
            assert zf.read(EXPORT_FILENAME).decode("utf-8") == build_csv(state, TODAY)
            assert "Image: `images/brand-acme.png`" in zf.read(SUMMARY_FILENAME).decode("utf-8")
            with Image.open(io.BytesIO(zf.read("images/brand-acme.png"))) as img:
                assert img.format == "PNG"

    def test_duplicate_group_names_get_unique_files(self, campaign):
        state = wizard.rename_ad_group(campaign, "group-generic", "Brand - Acme")
        state = wizard.set_generated_image(state, "group-brand", _png_data_url())
        state = wizard.set_generated_image(state, "group-generic", _png_data_url((0, 0, 255)))

        assert image_filenames(state) == {
            "group-brand": "images/brand-acme.png",
            "group-generic": "images/brand-acme-2.png",
        }

    def test_unreadable_image_is_skipped(self, campaign):
        state = wizard.set_generated_image(campaign, "group-brand", "data:image/png;base64,bm90IGFuIGltYWdl")

        with zipfile.ZipFile(io.BytesIO(build_export_zip(state, TODAY))) as zf:
            assert set(zf.namelist()) == {EXPORT_FILENAME, SUMMARY_FILENAME}


class TestExportZipFilename:

    def test_slug_and_utc_timestamp(self, campaign):
        now = datetime(2026, 10, 19, 14, 5, 9, tzinfo=timezone.utc)

        assert export_zip_filename(campaign, now) == "acme-plumbing_export_20261019-140509.zip"

    def test_untitled_campaign(self):
        name = export_zip_filename(CampaignState())

        assert name.startswith("campaign_export_")
        assert name.endswith(".zip")
