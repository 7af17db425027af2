# drama_providers/providers/dramabox/constants.py
"""
DramaBox provider constants and default configurations
"""


class DramaBoxDefaults:
    """Default values for DramaBox provider"""

    # API endpoints
    BASE_URL = 'https://sapi.dramaboxdb.com/drama-box'
    AUTH_PATH = '/auth/token'
    LATEST_PATH = '/he001/theater'
    SEARCH_PATH = '/search/suggest'
    CHAPTER_PATH = '/chapterv2/batch/load'

    # Client identity
    USER_AGENT = 'okhttp/4.10.0'
    VERSION = '430'
    VERSION_NAME = '4.3.0'
    PACKAGE_NAME = 'com.storymatrix.drama'
    APN = '1'
    PLATFORM = 'android'
    PLATFORM_TAG = '43'
    LANGUAGE = 'in'
    TIME_ZONE = '+0800'

    # Client ids: catalog browsing and stream resolution use different values
    CID_CATALOG = 'DRA1000042'
    CID_STREAM = 'DRA1000000'

    # Signing and local token derivation
    SIGNING_SECRET = 'dramabox_secret_key'
    TOKEN_ISSUER = 'dramabox'
    NONCE_LENGTH = 16

    # Token lifetimes (seconds)
    LIVE_TOKEN_TTL = 60 * 60
    FALLBACK_TOKEN_TTL = 30 * 60

    # HTTP settings (seconds)
    AUTH_TIMEOUT = 10
    API_TIMEOUT = 15
    RETRY_COUNT = 3
    RETRY_DELAY = 1.0

    # Catalog request parameters
    CHANNEL_ID = 43
    PLAY_SOURCE = 'discover_new_rec_new'


class DramaBoxHeaders:
    """Standard header configurations for DramaBox requests"""

    @staticmethod
    def get_base_headers(device_id: str, cid: str = None, user_agent: str = None) -> dict:
        """Get client identity headers shared by auth and API requests"""
        return {
            'User-Agent': user_agent or DramaBoxDefaults.USER_AGENT,
            'Accept-Encoding': 'gzip',
            'Content-Type': 'application/json',
            'version': DramaBoxDefaults.VERSION,
            'vn': DramaBoxDefaults.VERSION_NAME,
            'cid': cid or DramaBoxDefaults.CID_CATALOG,
            'package-name': DramaBoxDefaults.PACKAGE_NAME,
            'apn': DramaBoxDefaults.APN,
            'device-id': device_id,
            'language': DramaBoxDefaults.LANGUAGE,
            'current-language': DramaBoxDefaults.LANGUAGE,
            'p': DramaBoxDefaults.PLATFORM_TAG,
            'time-zone': DramaBoxDefaults.TIME_ZONE,
        }

    @staticmethod
    def get_api_headers(access_token: str, device_id: str, cid: str = None,
                        user_agent: str = None) -> dict:
        """Get headers for authenticated API requests"""
        headers = DramaBoxHeaders.get_base_headers(device_id, cid, user_agent)
        headers.update({
            'tn': f'Bearer {access_token}',
            'Content-Type': 'application/json; charset=UTF-8',
        })
        return headers


class DramaBoxConfig:
    """Configuration class that can be customized per instance"""

    def __init__(self, config_dict: dict = None):
        """Initialize with optional configuration overrides"""
        config = config_dict or {}

        # API endpoints
        self.base_url = str(config.get('base_url', DramaBoxDefaults.BASE_URL)).rstrip('/')
        self.auth_path = config.get('auth_path', DramaBoxDefaults.AUTH_PATH)

        # Client identity
        self.user_agent = config.get('user_agent', DramaBoxDefaults.USER_AGENT)
        self.cid_catalog = config.get('cid_catalog', DramaBoxDefaults.CID_CATALOG)
        self.cid_stream = config.get('cid_stream', DramaBoxDefaults.CID_STREAM)

        # Signing
        self.signing_secret = config.get('signing_secret', DramaBoxDefaults.SIGNING_SECRET)

        # HTTP settings
        self.auth_timeout = float(config.get('auth_timeout', DramaBoxDefaults.AUTH_TIMEOUT))
        self.api_timeout = float(config.get('api_timeout', DramaBoxDefaults.API_TIMEOUT))
        self.retry_count = int(config.get('retry_count', DramaBoxDefaults.RETRY_COUNT))
        self.retry_delay = float(config.get('retry_delay', DramaBoxDefaults.RETRY_DELAY))

    @property
    def auth_endpoint(self) -> str:
        return f"{self.base_url}{self.auth_path}"

    def get_url(self, endpoint: str) -> str:
        """Join an API path onto the base URL"""
        return f"{self.base_url}{endpoint}"

    def get_auth_headers(self, device_id: str) -> dict:
        """Get auth headers with this config's settings"""
        return DramaBoxHeaders.get_base_headers(device_id, self.cid_catalog, self.user_agent)

    def get_api_headers(self, access_token: str, device_id: str, cid: str = None) -> dict:
        """Get API headers with this config's settings"""
        return DramaBoxHeaders.get_api_headers(
            access_token=access_token,
            device_id=device_id,
            cid=cid or self.cid_catalog,
            user_agent=self.user_agent
        )
