#!/usr/bin/env python3
"""
Invoice Engine API - Main Launcher
Clean startup with proper path handling for the src/ layout
"""
import sys
from pathlib import Path

# Get project root directory
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT / 'src'))

# Fix encoding for Windows
if sys.stdout.encoding != 'utf-8':
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8', errors='replace')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8', errors='replace')


def main():
    """Main entry point"""
    try:
        # Import after path is set
        from config import validate_config
        import config
        import uvicorn
        from utils.logger import get_logger
        from api.main import create_app

        print("\n" + "="*80)
        print(config.SERVICE_NAME.upper())
        print("="*80)
        print(f"Project Root: {PROJECT_ROOT}")
        print("="*80 + "\n")

        # Validate configuration
        validate_config()
        print("[OK] Configuration validated")

        logger = get_logger(log_level=config.LOG_LEVEL, log_dir=config.LOG_DIR)
        logger.info(
            f"REST API starting on http://{config.API_HOST}:{config.API_PORT} (Swagger: /docs)",
            component="Main",
        )

        uvicorn.run(create_app(), host=config.API_HOST, port=config.API_PORT, log_level="info")

    except ValueError as e:
        print(f"\n[ERROR] Configuration error:\n{e}")
        print("\nPlease check your .env file and ensure all required variables are set.")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n\n[STOP] API stopped by user")
        sys.exit(0)


if __name__ == "__main__":
    main()
