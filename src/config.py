"""
Configuration module for the Invoice Engine service
Environment-agnostic: Works locally, in Docker, and on Google Cloud
Loads environment variables and validates configuration
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Get project root directory (parent of src/)
PROJECT_ROOT = Path(__file__).parent.parent

# Load environment variables from .env file (if exists - local dev only)
env_file = PROJECT_ROOT / '.env'
if env_file.exists():
    load_dotenv(env_file)

# ═══════════════════════════════════════════════════════════════════
# ENVIRONMENT DETECTION
# ═══════════════════════════════════════════════════════════════════

def detect_environment() -> str:
    """
    Detect which environment we're running in
    
    Returns:
        'cloud_run', 'kubernetes', 'docker', or 'local'
    """
    # Cloud Run sets K_SERVICE
    if os.getenv('K_SERVICE'):
        return 'cloud_run'
    
    # Kubernetes sets KUBERNETES_SERVICE_HOST
    if os.getenv('KUBERNETES_SERVICE_HOST'):
        return 'kubernetes'
    
    # Docker typically has /.dockerenv file
    if Path('/.dockerenv').exists():
        return 'docker'
    
    return 'local'

RUNTIME_ENVIRONMENT = detect_environment()

# ═══════════════════════════════════════════════════════════════════
# LOGGING
# ═══════════════════════════════════════════════════════════════════

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
LOG_DIR = os.getenv('LOG_DIR', str(PROJECT_ROOT / 'logs'))

# ═══════════════════════════════════════════════════════════════════
# REST API (FastAPI + Swagger)
# ═══════════════════════════════════════════════════════════════════

SERVICE_NAME = 'Invoice Engine API'
SERVICE_VERSION = '0.1.0'

API_PORT = int(os.getenv('API_PORT', '8000'))
API_HOST = os.getenv('API_HOST', '0.0.0.0')

# Cloud Run sets PORT to the single port it routes traffic to
_cloud_run_port = os.getenv('PORT')
if _cloud_run_port:
    API_PORT = int(_cloud_run_port)

# CORS configuration (comma-separated origins)
API_CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv('API_CORS_ORIGINS', 'http://localhost:3000').split(',')
    if origin.strip()
]


def validate_config():
    """Validate that all required configuration is present"""
    from invoice_engine import engine_config

    errors = []
    
    print(f"[CONFIG] Runtime environment: {RUNTIME_ENVIRONMENT}")
    
    if LOG_LEVEL not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        errors.append(f"LOG_LEVEL is invalid: {LOG_LEVEL}")
    
    if not engine_config.COMPANY_STATE:
        errors.append("COMPANY_STATE is not set (every invoice will be treated as inter-state)")
    
    if engine_config.INVOICE_SEQUENCE_WIDTH < 1:
        errors.append("INVOICE_SEQUENCE_WIDTH must be at least 1")
    
    if engine_config.NUMBERING_MAX_RETRIES < 0:
        errors.append("NUMBERING_MAX_RETRIES must not be negative")
    
    if errors:
        raise ValueError("Configuration errors:\n" + "\n".join(errors))
    
    return True


if __name__ == "__main__":
    try:
        validate_config()
        print("[OK] Configuration validated successfully")
    except ValueError as e:
        print(f"[FAIL] Configuration validation failed:\n{e}")
