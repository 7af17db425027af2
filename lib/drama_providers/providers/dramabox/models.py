# drama_providers/providers/dramabox/models.py
from typing import Any, Dict, List, Optional, Union

from ...base.exceptions import InvalidInput

# Envelope paths of the arrays each operation returns
LATEST_RECORDS_PATH = ('data', 'newTheaterList', 'records')
SUGGEST_LIST_PATH = ('data', 'suggestList')
CHAPTER_LIST_PATH = ('data', 'chapterList')


def extract_list(envelope: Any, path) -> List[Any]:
    """
    Walk *path* through nested dicts and return the list found there.

    Any missing segment, a non-dict on the way, or a non-list at the end
    yields an empty list.
    """
    current = envelope
    for key in path:
        if not isinstance(current, dict):
            return []
        current = current.get(key)
    return current if isinstance(current, list) else []


def coerce_episode(episode: Union[int, float, str]) -> int:
    """Turn an episode number given as int, float or numeric string into an int"""
    if isinstance(episode, bool):
        raise InvalidInput(f"Invalid episode: {episode!r}")
    if isinstance(episode, int):
        return episode
    if isinstance(episode, float):
        try:
            return int(episode)
        except (ValueError, OverflowError) as e:
            raise InvalidInput(f"Invalid episode: {episode!r}") from e
    if isinstance(episode, str):
        text = episode.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return int(float(text))
        except (ValueError, OverflowError):
            pass
    raise InvalidInput(f"Invalid episode: {episode!r}")


def first_cdn_url(chapter: Dict[str, Any]) -> Optional[str]:
    """First playable URL of a chapter, if it has any"""
    cdn_list = chapter.get('cdnList') if isinstance(chapter, dict) else None
    if isinstance(cdn_list, list) and cdn_list:
        return cdn_list[0]
    return None


def summarize_chapter(chapter: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'index': chapter.get('index'),
        'title': chapter.get('title'),
        'duration': chapter.get('duration'),
    }
