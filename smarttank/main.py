"""
Main entry point for the smart tank dashboard
"""
import argparse
import logging
import sys

from smarttank import __version__
from smarttank.config import (
    BLYNK_API_URL, BLYNK_AUTH_TOKEN, REQUEST_TIMEOUT, TICK_INTERVAL_MS,
    LEVEL_POLL_INTERVAL_MS, PAUSE_POLL_WHEN_HIDDEN, SETTINGS_FILE,
    WEB_HOST, WEB_PORT, load_config_file
)
from smarttank.blynk import BlynkGateway
from smarttank.dashboard import DashboardController
from smarttank.settings_store import SettingsStore
from smarttank.web import create_app

log = logging.getLogger('smarttank')

def setup_logging(debug=False, log_file=None):
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=handlers,
    )

def main():
    """Main entry point"""

    file_config = load_config_file()

    parser = argparse.ArgumentParser(
        prog='smarttank',
        description='Water tank dashboard with automatic pump control via Blynk'
    )
    parser.add_argument('--host', default=file_config.get('WEB_HOST', WEB_HOST),
                       help=f'Host to bind to (default: {WEB_HOST})')
    parser.add_argument('--port', type=int, default=file_config.get('WEB_PORT', WEB_PORT),
                       help=f'Port to listen on (default: {WEB_PORT})')
    parser.add_argument('--token', default=file_config.get('BLYNK_AUTH_TOKEN', BLYNK_AUTH_TOKEN),
                       help='Blynk auth token (default: secrets file or SMARTTANK_BLYNK_TOKEN)')
    parser.add_argument('--api-url', default=file_config.get('BLYNK_API_URL', BLYNK_API_URL),
                       help='Blynk external API base URL')
    parser.add_argument('--settings', default=file_config.get('SETTINGS_FILE', str(SETTINGS_FILE)),
                       help=f'Settings file (default: {SETTINGS_FILE})')
    parser.add_argument('--tick-ms', type=int,
                       default=file_config.get('TICK_INTERVAL_MS', TICK_INTERVAL_MS),
                       help=f'Control loop period in ms (default: {TICK_INTERVAL_MS})')
    parser.add_argument('--poll-ms', type=int,
                       default=file_config.get('LEVEL_POLL_INTERVAL_MS', LEVEL_POLL_INTERVAL_MS),
                       help=f'Tank level poll period in ms (default: {LEVEL_POLL_INTERVAL_MS})')
    parser.add_argument('--pause-poll-when-hidden', action='store_true',
                       default=file_config.get('PAUSE_POLL_WHEN_HIDDEN', PAUSE_POLL_WHEN_HIDDEN),
                       help='Also pause the level poll while the dashboard is hidden')
    parser.add_argument('--log-file', default=file_config.get('LOG_FILE'),
                       help='Also write diagnostics to this file')
    parser.add_argument('--debug', action='store_true',
                       help='Enable debug logging')
    parser.add_argument('--version', action='version',
                       version=f'%(prog)s {__version__}')

    args = parser.parse_args()
    setup_logging(args.debug, args.log_file)

    if not args.token:
        log.warning("No Blynk token configured, every Blynk request will fail. "
                    "Set BLYNK_AUTH_TOKEN in the secrets file or SMARTTANK_BLYNK_TOKEN.")

    gateway = BlynkGateway(args.token, api_url=args.api_url, timeout=REQUEST_TIMEOUT)
    controller = DashboardController(
        gateway,
        SettingsStore(args.settings),
        tick_interval=args.tick_ms / 1000,
        poll_interval=args.poll_ms / 1000,
        pause_poll_when_hidden=args.pause_poll_when_hidden,
    )

    log.info("=== Smart Tank v%s ===", __version__)
    log.info("Settings: %s", args.settings)
    log.info("Starting HTTP server on http://%s:%s/", args.host, args.port)

    controller.start()
    try:
        create_app(controller).run(host=args.host, port=args.port, debug=args.debug,
                                   use_reloader=False)
    finally:
        controller.stop()

if __name__ == "__main__":
    main()
