"""
Storage utility.

Writes analysis results, recommendations and trend tables to disk.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Dict

import pandas as pd

from reviewpulse.models.analysis import AnalysisData
from reviewpulse.models.business import business_slug
from reviewpulse.models.recommendation import RecommendationResponse

logger = logging.getLogger(__name__)


class StorageManager:
    """
    Manages file output for a pipeline run.

    Handles:
    - Analysis (output/<slug>_analysis.json)
    - Recommendations (output/<slug>_recommendations.json)
    - Trend tables (output/<slug>_rating_trend.csv, <slug>_theme_trend.csv)
    """

    def __init__(self, output_root: str):
        """
        Initialize storage manager.

        Args:
            output_root: Output directory (created if missing)
        """
        self.output_root = output_root
        os.makedirs(self.output_root, exist_ok=True)

        logger.info(f"Initialized StorageManager with output_root={output_root}")

    def _path(self, business_name: str, suffix: str) -> str:
        return os.path.join(self.output_root, f"{business_slug(business_name)}_{suffix}")

    def _write_json(self, data, filepath: str) -> None:
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except Exception as e:
            logger.error(f"Failed to write {filepath}: {e}")
            raise

    def save_analysis(self, analysis: AnalysisData, business_name: str) -> str:
        """
        Save full analysis as JSON.

        Returns:
            Path to the written file
        """
        filepath = self._path(business_name, "analysis.json")
        self._write_json(analysis.to_dict(), filepath)
        logger.info(f"Saved analysis of {analysis.metrics.total_reviews} reviews to {filepath}")
        return filepath

    def save_recommendations(self, recommendations: RecommendationResponse, business_name: str) -> str:
        """
        Save recommendations as JSON.

        Returns:
            Path to the written file
        """
        filepath = self._path(business_name, "recommendations.json")
        self._write_json(recommendations.to_dict(), filepath)
        logger.info(f"Saved recommendations to {filepath}")
        return filepath

    def export_trend_tables(self, analysis: AnalysisData, business_name: str) -> Dict[str, str]:
        """
        Export monthly trend tables as CSV plus a metadata JSON.

        The theme table is pivoted to one row per month and one column per
        theme, with zeros where a theme was not in that month's top list.

        Returns:
            Dict with "rating_trend", "theme_trend" and "metadata" paths
        """
        rating_df = pd.DataFrame(
            [r.to_dict() for r in analysis.trends.rating_trend],
            columns=["month", "avgRating", "count"]
        )

        theme_rows = [
            {"month": m.month, "theme": t.theme, "count": t.count}
            for m in analysis.trends.theme_trend
            for t in m.themes
        ]
        if theme_rows:
            theme_df = (
                pd.DataFrame(theme_rows)
                .pivot_table(index="month", columns="theme", values="count", aggfunc="sum", fill_value=0)
                .sort_index()
                .reset_index()
            )
            theme_df.columns.name = None
        else:
            logger.warning(f"No theme trend data for {business_name}, creating empty theme table")
            theme_df = pd.DataFrame(columns=["month"])

        paths = {
            "rating_trend": self._path(business_name, "rating_trend.csv"),
            "theme_trend": self._path(business_name, "theme_trend.csv"),
            "metadata": self._path(business_name, "trend_metadata.json"),
        }

        rating_df.to_csv(paths["rating_trend"], index=False)
        theme_df.to_csv(paths["theme_trend"], index=False)

        months = [r.month for r in analysis.trends.rating_trend]
        dated_reviews = int(rating_df["count"].sum()) if not rating_df.empty else 0
        metadata = {
            "business": business_name,
            "month_range": {
                "start": months[0] if months else None,
                "end": months[-1] if months else None
            },
            "months_with_reviews": len(months),
            "total_reviews": analysis.metrics.total_reviews,
            "dated_reviews": dated_reviews,
            "undated_reviews": analysis.metrics.total_reviews - dated_reviews,
            "total_themes": len(analysis.themes),
            "generated_at": datetime.now(timezone.utc).isoformat()
        }
        self._write_json(metadata, paths["metadata"])

        logger.info(
            f"Trend tables saved for {business_name} "
            f"({len(rating_df)} months, {max(len(theme_df.columns) - 1, 0)} themes)"
        )
        return paths
