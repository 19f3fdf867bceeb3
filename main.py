"""
ReviewPulse - Review Analytics & Recommendations

CLI entry point for running the analysis pipeline.
"""

import argparse
import logging
import sys

from reviewpulse.agents.recommendation import PROVIDERS, GEMINI_PROVIDER, RecommendationConfig
from reviewpulse.models.business import BUSINESS_TYPE_MAP
from reviewpulse.orchestrator import PipelineOrchestrator
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ReviewPulse - Customer Review Analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyse an exported review table
  python main.py --business "The Little Prince Cafe" --input data/cafe.json

  # Look up data/<business slug>.json|csv and add recommendations
  python main.py --business "Vol de Nuit, The Hidden Bar" --recommend

  # Demo run on synthetic reviews with offline recommendations
  python main.py --business "L'Envol Art Space" --mock --recommend --provider default

Note: Set GOOGLE_API_KEY before using the gemini provider.
        """
    )

    parser.add_argument(
        "--business",
        default=settings.DEFAULT_BUSINESS,
        help=f"Business name; known: {', '.join(BUSINESS_TYPE_MAP)} (default: {settings.DEFAULT_BUSINESS})"
    )

    parser.add_argument(
        "--input",
        help="Review export to analyse (.json array of rows or .csv)"
    )

    parser.add_argument(
        "--data-root",
        default=str(settings.DATA_ROOT),
        help=f"Directory searched when --input is omitted (default: {settings.DATA_ROOT})"
    )

    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Output directory (default: {settings.OUTPUT_ROOT})"
    )

    parser.add_argument(
        "--mock",
        action="store_true",
        default=settings.USE_MOCK_DATA,
        help="Generate synthetic reviews instead of reading an export"
    )

    parser.add_argument(
        "--recommend",
        action="store_true",
        help="Generate business recommendations after the analysis"
    )

    parser.add_argument(
        "--provider",
        default=settings.RECOMMENDATION_PROVIDER,
        choices=list(PROVIDERS),
        help=f"Recommendation provider (default: {settings.RECOMMENDATION_PROVIDER})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    recommendation_config = None
    if args.recommend:
        if args.provider == GEMINI_PROVIDER and not settings.GOOGLE_API_KEY:
            logger.error(
                "GOOGLE_API_KEY environment variable not set. "
                "Set it or use --provider default."
            )
            sys.exit(1)

        recommendation_config = RecommendationConfig(
            provider=args.provider,
            api_key=settings.GOOGLE_API_KEY or None,
            model_name=settings.RECOMMENDATION_MODEL,
            temperature=settings.RECOMMENDATION_TEMPERATURE,
            max_retries=settings.RECOMMENDATION_MAX_RETRIES,
            fallback_provider=settings.RECOMMENDATION_FALLBACK_PROVIDER
        )

    print("=" * 60)
    print("ReviewPulse - Customer Review Analytics")
    print("=" * 60)
    print(f"Business: {args.business}")
    print(f"Source: {args.input or ('mock data' if args.mock else args.data_root)}")
    print(f"Recommendations: {args.provider if args.recommend else 'off'}")
    print("=" * 60)
    print()

    try:
        logger.info("Initializing ReviewPulse pipeline...")
        orchestrator = PipelineOrchestrator(
            output_root=args.output_dir,
            data_root=args.data_root,
            use_mock_data=args.mock
        )

        outputs = orchestrator.run(
            business_name=args.business,
            source_path=args.input,
            recommendation_config=recommendation_config
        )

        print()
        print("=" * 60)
        print("✅ Pipeline completed successfully!")
        print("=" * 60)
        for name, path in outputs.items():
            print(f"{name}: {path}")
        print("=" * 60)

        logger.info("ReviewPulse completed successfully")
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Pipeline interrupted by user")
        print("\n⚠️  Pipeline interrupted")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        print(f"\n❌ Pipeline failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()
