"""
Integration tests for the pipeline orchestrator and CLI.

Runs on mock data with the offline recommendation provider, so no API key
or network access is needed.
"""

import json
import os
import tempfile

import pandas as pd
import pytest

import config.settings as settings
from main import main
from reviewpulse.agents.recommendation import RecommendationConfig
from reviewpulse.models.recommendation import DEFAULT_RECOMMENDATIONS
from reviewpulse.orchestrator import PipelineOrchestrator


def test_pipeline_mock_run():
    """Test a full mock run writes analysis, trends and recommendations."""
    with tempfile.TemporaryDirectory() as tmpdir:
        orchestrator = PipelineOrchestrator(output_root=tmpdir, use_mock_data=True)

        outputs = orchestrator.run(
            "The Little Prince Cafe",
            recommendation_config=RecommendationConfig(provider="default")
        )

        assert set(outputs) == {"analysis", "rating_trend", "theme_trend", "metadata", "recommendations"}
        assert all(os.path.exists(path) for path in outputs.values())

        with open(outputs["analysis"]) as f:
            analysis = json.load(f)
        assert analysis["metrics"]["totalReviews"] == settings.MOCK_REVIEWS_PER_BUSINESS
        assert analysis["themes"][0]["theme"] == analysis["themes"][0]["theme"].lower()

        with open(outputs["recommendations"]) as f:
            assert json.load(f) == DEFAULT_RECOMMENDATIONS

        rating = pd.read_csv(outputs["rating_trend"])
        assert list(rating["month"]) == sorted(rating["month"])


def test_pipeline_without_recommendations():
    """Test that recommendations are skipped without a config."""
    with tempfile.TemporaryDirectory() as tmpdir:
        outputs = PipelineOrchestrator(output_root=tmpdir, use_mock_data=True).run("L'Envol Art Space")

        assert "recommendations" not in outputs


def test_pipeline_from_export():
    """Test a run against an explicit JSON export."""
    rows = [
        {"stars": 5, "publishedAtDate": "2024-02-01T10:00:00Z", "mainThemes": '["Cocktails"]'},
        {"stars": 3, "publishedAtDate": "2024-03-01T10:00:00Z", "mainThemes": "cocktails, Noise"},
    ]
    with tempfile.TemporaryDirectory() as tmpdir:
        source = os.path.join(tmpdir, "bar.json")
        with open(source, "w") as f:
            json.dump(rows, f)

        outputs = PipelineOrchestrator(output_root=tmpdir).run("Vol de Nuit, The Hidden Bar", source_path=source)

        with open(outputs["analysis"]) as f:
            analysis = json.load(f)

    assert analysis["metrics"]["avgRating"] == pytest.approx(4.0)
    # Reviews are indexed newest first after ingestion
    assert analysis["themes"][0] == {
        "theme": "cocktails",
        "count": 2,
        "averageSentiment": 0.0,
        "reviewIndices": [0, 1]
    }
    assert analysis["themes"][1]["theme"] == "noise"


def test_cli_mock_run(monkeypatch, capsys):
    """Test the CLI end to end with the offline provider."""
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.setattr(settings, "LOG_FILE", os.path.join(tmpdir, "run.log"))

        with pytest.raises(SystemExit) as exc:
            main([
                "--business", "The Little Prince Cafe",
                "--mock",
                "--recommend",
                "--provider", "default",
                "--output-dir", tmpdir,
                "--log-level", "WARNING"
            ])

        assert exc.value.code == 0
        assert os.path.exists(os.path.join(tmpdir, "the_little_prince_cafe_recommendations.json"))

    assert "Pipeline completed successfully" in capsys.readouterr().out


def test_cli_requires_api_key_for_gemini(monkeypatch):
    """Test that the gemini provider needs GOOGLE_API_KEY."""
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.setattr(settings, "LOG_FILE", os.path.join(tmpdir, "run.log"))
        monkeypatch.setattr(settings, "GOOGLE_API_KEY", "")

        with pytest.raises(SystemExit) as exc:
            main(["--mock", "--recommend", "--provider", "gemini", "--output-dir", tmpdir])

        assert exc.value.code == 1


def test_cli_missing_export_fails(monkeypatch):
    """Test a non-zero exit when the export does not exist."""
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.setattr(settings, "LOG_FILE", os.path.join(tmpdir, "run.log"))

        with pytest.raises(SystemExit) as exc:
            main(["--input", os.path.join(tmpdir, "missing.json"), "--output-dir", tmpdir])

        assert exc.value.code == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
