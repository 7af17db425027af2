#!/usr/bin/env python3
import os
import sys

from bottle import Bottle, run

# Add lib path for imports
script_dir = os.path.dirname(os.path.abspath(__file__))
LIB_PATH = os.path.join(script_dir, 'lib')
if os.path.exists(LIB_PATH):
    sys.path.insert(0, LIB_PATH)

try:
    from drama_providers import get_configured_client
    from drama_providers.base.utils import logger
    from drama_providers.base.utils.environment import get_environment_manager
    from routes import setup_catalog_routes, setup_token_routes
except ImportError as import_err:
    print(f"DramaBox Backend: Critical import failed - {str(import_err)}", file=sys.stderr)
    raise


class DramaService:
    def __init__(self, client=None):
        self.app = Bottle()

        self.env_manager = get_environment_manager()

        service_config = self.env_manager.get_service_config()
        self.server_host = service_config['host']
        self.server_port = service_config['port']

        # Initialize client
        try:
            self.client = client or get_configured_client()
            logger.info("DramaBox client ready")
        except Exception as init_err:
            logger.error(f"Failed to initialize client - {str(init_err)}")
            raise

        self.setup_routes()

    def setup_routes(self):
        setup_catalog_routes(self.app, self.client, self)
        setup_token_routes(self.app, self.client, self)

        @self.app.route('/')
        def index():
            return {
                'service': self.env_manager.get_config('app_name', 'DramaBox Backend'),
                'endpoints': [
                    '/api/latest?page=<n>',
                    '/api/search?q=<keyword>',
                    '/api/stream/<book_id>/<episode>',
                    '/api/token',
                    '/api/token/refresh',
                ],
            }


def start_service(service_instance):
    """Start the Bottle server"""
    logger.info(f"Starting server on {service_instance.server_host}:{service_instance.server_port}")

    debug_mode = service_instance.env_manager.get_service_config()['debug']

    run(service_instance.app, host=service_instance.server_host, port=service_instance.server_port,
        quiet=not debug_mode, debug=debug_mode)


def run_standalone_service():
    """Run service in standalone mode"""
    logger.info("Starting DramaBox Backend service")

    service = DramaService()

    print("=" * 60)
    print("DramaBox Backend Service")
    print("=" * 60)
    print(f"Port: {service.server_port}")
    print(f"Device ID: {service.client.token_info()['deviceId']}")
    print(f"Log Directory: {service.env_manager.get_config('profile_path', 'N/A')}")
    print("=" * 60)
    print(f"API Endpoints:")
    print(f"  http://localhost:{service.server_port}/api/latest")
    print(f"  http://localhost:{service.server_port}/api/search?q=<keyword>")
    print(f"  http://localhost:{service.server_port}/api/stream/<book_id>/<episode>")
    print("=" * 60)
    print("Press Ctrl+C to stop the service")
    print("=" * 60)

    try:
        start_service(service)
    except KeyboardInterrupt:
        print("\nService stopped by user")
    except Exception as e:
        print(f"Error running service: {e}")
        sys.exit(1)


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='DramaBox Backend Service')
    parser.add_argument('--port', type=int, help='Server port (overrides config)')
    parser.add_argument('--host', help='Bind address (overrides config)')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')

    args = parser.parse_args()

    env_manager = get_environment_manager()

    # Apply CLI overrides
    if args.port:
        env_manager.set_config('server_port', args.port)
        logger.info(f"Port overridden via CLI: {args.port}")

    if args.host:
        env_manager.set_config('server_host', args.host)
        logger.info(f"Host overridden via CLI: {args.host}")

    if args.debug:
        env_manager.set_config('debug_mode', True)
        logger.info("Debug mode enabled via CLI")

    run_standalone_service()
