"""
Pipeline Orchestrator.

Coordinates one dashboard refresh for a business: ingestion, diagnostics,
analytics, export and optional recommendations.
"""

import logging
from datetime import datetime
from typing import Dict, Optional

from reviewpulse.agents.ingestion import ReviewIngestionAgent
from reviewpulse.agents.recommendation import RecommendationAgent, RecommendationConfig
from reviewpulse.engine import AnalyticsConfig, ReviewAnalyticsEngine
from reviewpulse.models.business import resolve_business_type
from reviewpulse.utils.diagnostics import check_for_date_filtering, log_review_stats
from reviewpulse.utils.storage import StorageManager
import config.settings as settings

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """
    Orchestrates a single business run.

    Coordinates:
    1. Ingestion → 2. Diagnostics → 3. Analytics Engine
    → 4. Analysis + Trend Export → 5. Recommendations (optional)
    """

    def __init__(
        self,
        output_root: str,
        data_root: Optional[str] = None,
        use_mock_data: bool = False,
        analytics_config: Optional[AnalyticsConfig] = None
    ):
        """
        Initialize pipeline orchestrator.

        Args:
            output_root: Directory for analysis, trend and recommendation files
            data_root: Directory holding per-business review exports
            use_mock_data: Generate synthetic reviews instead of reading exports
            analytics_config: Engine configuration (defaults to settings)
        """
        logger.info("Initializing pipeline components...")

        self.storage = StorageManager(output_root)
        self.ingestion_agent = ReviewIngestionAgent(
            use_mock_data=use_mock_data,
            data_root=data_root
        )
        self.engine = ReviewAnalyticsEngine(analytics_config or AnalyticsConfig.from_settings())
        self.recommendation_agent = RecommendationAgent()

        logger.info("Pipeline initialized successfully")

    def run(
        self,
        business_name: str,
        source_path: Optional[str] = None,
        recommendation_config: Optional[RecommendationConfig] = None
    ) -> Dict[str, str]:
        """
        Run the pipeline for one business.

        Args:
            business_name: Business display name
            source_path: Explicit review export (JSON or CSV)
            recommendation_config: When given, recommendations are generated
                with these provider settings

        Returns:
            Dict of output name -> file path
        """
        start_time = datetime.now()
        business_type = resolve_business_type(business_name)
        logger.info(f"Starting pipeline for {business_name} ({business_type.value})")

        # STAGE 1: Ingestion
        reviews = self.ingestion_agent.fetch_reviews(
            business_name=business_name,
            source_path=source_path,
            limit=settings.MOCK_REVIEWS_PER_BUSINESS
        )

        # STAGE 2: Diagnostics
        log_review_stats(business_name, reviews)
        check_for_date_filtering(
            business_name,
            reviews,
            recent_months=settings.DATE_FILTER_RECENT_MONTHS,
            warning_percent=settings.DATE_FILTER_WARNING_PERCENT
        )

        # STAGE 3: Analytics
        analysis = self.engine.process(reviews)

        # STAGE 4: Export
        outputs = {"analysis": self.storage.save_analysis(analysis, business_name)}
        outputs.update(self.storage.export_trend_tables(analysis, business_name))

        # STAGE 5: Recommendations
        if recommendation_config is not None:
            recommendations = self.recommendation_agent.generate_recommendations(
                analysis,
                business_type,
                recommendation_config
            )
            outputs["recommendations"] = self.storage.save_recommendations(recommendations, business_name)

        elapsed = (datetime.now() - start_time).total_seconds()
        logger.info(
            f"Pipeline complete for {business_name}: {analysis.metrics.total_reviews} reviews "
            f"in {elapsed:.2f}s"
        )
        return outputs
