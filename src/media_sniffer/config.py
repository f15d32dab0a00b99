"""
Configuration - Media Sniffer

Loads environment variables and app configuration.
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# HTTP server
HOST = os.getenv('HOST', '0.0.0.0')
PORT = int(os.getenv('PORT', '3000'))
PUBLIC_DIR = os.getenv(
    'PUBLIC_DIR',
    os.path.join(os.path.dirname(__file__), '..', '..', 'public')
)

# Playwright / Browser settings
CHROME_PATH = os.getenv('CHROME_PATH') or None
BROWSER_HEADLESS = os.getenv('BROWSER_HEADLESS', 'true').lower() == 'true'
BROWSER_NO_SANDBOX = os.getenv('BROWSER_NO_SANDBOX', 'true').lower() == 'true'
BROWSER_TIMEOUT = int(os.getenv('BROWSER_TIMEOUT', '30000'))  # 30 seconds

# Media discovery settings
MEDIA_WAIT_TIMEOUT = int(os.getenv('MEDIA_WAIT_TIMEOUT', '5000'))  # ms, <video>/<audio> wait
GRACE_PERIOD = float(os.getenv('GRACE_PERIOD', '5'))  # seconds after DOM ready

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
