"""
Test Configuration and Fixtures

Environment setup MUST happen before any application import: settings and the
loguru sinks read it at import time.
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('POSTGRES_DB', 'turf_booking_test_db')
    os.environ.setdefault('DB_POOL_SIZE_WRITE', '2')
    os.environ.setdefault('DB_POOL_SIZE_READ', '2')
    os.environ.setdefault('DB_POOL_MAX_OVERFLOW', '2')
    # Notifications stay in-process during tests
    os.environ['SMTP_HOST'] = ''


_early_setup_test_environment()
