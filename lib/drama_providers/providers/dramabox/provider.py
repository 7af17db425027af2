# drama_providers/providers/dramabox/provider.py
import time
from typing import Any, Callable, Dict, List, Optional, Union

from ...base.auth import AuthToken, DeviceIdentity, TokenStore
from ...base.network import HTTPManager, HTTPManagerFactory
from ...base.utils.logger import logger
from .auth import DramaBoxTokenMinter
from .constants import DramaBoxConfig, DramaBoxDefaults
from .dispatcher import RequestDispatcher
from .models import (CHAPTER_LIST_PATH, LATEST_RECORDS_PATH, SUGGEST_LIST_PATH,
                     coerce_episode, extract_list)


class DramaBoxCatalogClient:
    """
    Catalog operations against the DramaBox API.

    Owns one device identity and one token slot for its whole lifetime and
    shares them between the token minter and the request dispatcher.
    """

    def __init__(
        self,
        config: Optional[Dict] = None,
        http_manager: Optional[HTTPManager] = None,
        device: Optional[DeviceIdentity] = None,
        token_store: Optional[TokenStore] = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.dramabox_config = DramaBoxConfig(config)

        self.http_manager = http_manager or HTTPManagerFactory.create_for_provider(
            self.provider_name,
            user_agent=self.dramabox_config.user_agent,
            timeout=self.dramabox_config.api_timeout,
        )

        self.device = device or DeviceIdentity()
        self.token_store = token_store or TokenStore(self.provider_name, clock=clock)

        self.auth = DramaBoxTokenMinter(
            device=self.device,
            token_store=self.token_store,
            http_manager=self.http_manager,
            config=self.dramabox_config,
            clock=clock,
        )
        self.dispatcher = RequestDispatcher(
            minter=self.auth,
            http_manager=self.http_manager,
            config=self.dramabox_config,
            sleep=sleep,
        )

        logger.info(
            f"DramaBox client initialized (base: {self.dramabox_config.base_url}, "
            f"device: {self.device.identity()[:8]}...)"
        )

    @property
    def provider_name(self) -> str:
        return "dramabox"

    def get_latest(self, page_no: int = 1) -> List[Dict[str, Any]]:
        """Latest theater records for a page"""
        body = {
            'newChannelStyle': 1,
            'isNeedRank': 1,
            'pageNo': page_no,
            'index': 1,
            'channelId': DramaBoxDefaults.CHANNEL_ID,
        }
        envelope = self.dispatcher.call(DramaBoxDefaults.LATEST_PATH, body)
        records = extract_list(envelope, LATEST_RECORDS_PATH)
        logger.debug(f"DramaBox latest page {page_no}: {len(records)} records")
        return records

    def search(self, keyword: str) -> List[Dict[str, Any]]:
        """Search suggestions for a keyword, sent unmodified"""
        envelope = self.dispatcher.call(DramaBoxDefaults.SEARCH_PATH, {'keyword': keyword})
        return extract_list(envelope, SUGGEST_LIST_PATH)

    def get_stream_links(self, book_id: str, episode: Union[int, str]) -> List[Dict[str, Any]]:
        """
        Resolve chapter entries (with CDN URLs) for an episode of a book

        Args:
            book_id: DramaBox book id
            episode: Episode index, int or numeric string

        Returns:
            Chapter entries; each carries a 'cdnList' of stream URLs

        Raises:
            InvalidInput: Episode is not a number
            UpstreamError: All attempts failed
        """
        body = {
            'boundaryIndex': 0,
            'comingPlaySectionId': -1,
            'index': coerce_episode(episode),
            'currencyPlaySource': DramaBoxDefaults.PLAY_SOURCE,
            'needEndRecommend': 0,
            'currencyPlaySourceName': '',
            'preLoad': False,
            'rid': '',
            'pullCid': '',
            'loadDirection': 0,
            'startUpKey': '',
            'bookId': book_id,
        }
        envelope = self.dispatcher.call(
            DramaBoxDefaults.CHAPTER_PATH, body, cid=self.dramabox_config.cid_stream
        )
        return extract_list(envelope, CHAPTER_LIST_PATH)

    def token_info(self) -> Dict[str, Any]:
        return self.auth.info()

    def refresh_token(self) -> AuthToken:
        return self.auth.refresh()
