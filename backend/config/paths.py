"""
Centralized path configuration for DockWatch
Keeps log output on the volume-mounted data directory
"""

import os

# The /app/data directory is mounted as a volume in Docker
DATA_DIR = os.getenv('DOCKWATCH_DATA_DIR', '/app/data')

LOG_DIR = os.path.join(DATA_DIR, 'logs')

# For development/testing outside Docker
if not os.path.exists('/app') and 'DOCKWATCH_DATA_DIR' not in os.environ:
    # Running locally, use relative paths
    DATA_DIR = './data'
    LOG_DIR = os.path.join(DATA_DIR, 'logs')
