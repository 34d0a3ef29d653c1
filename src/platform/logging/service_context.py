"""
Service identification for log lines.

Every log record carries ``service@env:instance`` so that output from the API
process and the reconciliation job can be told apart once aggregated.
"""

import os
from functools import lru_cache


def get_service_name() -> str:
    return os.getenv('SERVICE_NAME', 'turf-booking')


@lru_cache(maxsize=1)
def get_service_context() -> str:
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    # Container hostnames are unique per replica; fall back to PID locally
    instance = os.getenv('HOSTNAME', '')[:12] or str(os.getpid())
    return f'{get_service_name()}@{deploy_env}:{instance}'
