"""Shared fixtures: canned service responses and an in-memory transport."""

import pytest

from mal_list.base_client import TransportResponse

ANIME_LIST_XML = """<?xml version="1.0" encoding="UTF-8"?>
<myanimelist>
  <myinfo>
    <user_id>12345</user_id>
    <user_name>testuser</user_name>
    <user_watching>1</user_watching>
    <user_completed>1</user_completed>
    <user_onhold>0</user_onhold>
    <user_dropped>0</user_dropped>
    <user_plantowatch>0</user_plantowatch>
    <user_days_spent_watching>12.5</user_days_spent_watching>
  </myinfo>
  <anime>
    <series_animedb_id>4224</series_animedb_id>
    <series_title>Toradora!</series_title>
    <series_synonyms>; Tiger X Dragon; </series_synonyms>
    <series_type>1</series_type>
    <series_episodes>25</series_episodes>
    <series_status>2</series_status>
    <series_start>2008-10-02</series_start>
    <series_end>2009-03-26</series_end>
    <series_image>https://cdn.myanimelist.net/images/anime/13/22128.jpg</series_image>
    <my_id>0</my_id>
    <my_watched_episodes>5</my_watched_episodes>
    <my_start_date>2017-01-15</my_start_date>
    <my_finish_date>0000-00-00</my_finish_date>
    <my_score>8</my_score>
    <my_status>1</my_status>
    <my_rewatching></my_rewatching>
    <my_rewatching_ep>0</my_rewatching_ep>
    <my_last_updated>1500000000</my_last_updated>
    <my_tags>comedy, romance</my_tags>
  </anime>
  <anime>
    <series_animedb_id>1</series_animedb_id>
    <series_title>Cowboy Bebop</series_title>
    <series_synonyms></series_synonyms>
    <series_type>0</series_type>
    <series_episodes>26</series_episodes>
    <series_status>2</series_status>
    <series_start>1998-04-03</series_start>
    <series_end>1999-04-24</series_end>
    <series_image>https://cdn.myanimelist.net/images/anime/4/19644.jpg</series_image>
    <my_id>0</my_id>
    <my_watched_episodes>26</my_watched_episodes>
    <my_start_date>0000-00-00</my_start_date>
    <my_finish_date>2016-05-01</my_finish_date>
    <my_score>10</my_score>
    <my_status>2</my_status>
    <my_rewatching>1</my_rewatching>
    <my_rewatching_ep>3</my_rewatching_ep>
    <my_last_updated>1400000000</my_last_updated>
    <my_tags></my_tags>
  </anime>
</myanimelist>
"""

MANGA_LIST_XML = """<?xml version="1.0" encoding="UTF-8"?>
<myanimelist>
  <myinfo>
    <user_id>12345</user_id>
    <user_name>testuser</user_name>
    <user_reading>1</user_reading>
    <user_completed>0</user_completed>
    <user_onhold>0</user_onhold>
    <user_dropped>0</user_dropped>
    <user_plantoread>0</user_plantoread>
    <user_days_spent_watching>3.25</user_days_spent_watching>
  </myinfo>
  <manga>
    <series_mangadb_id>2</series_mangadb_id>
    <series_title>Berserk</series_title>
    <series_synonyms>Berserk: The Prototype; </series_synonyms>
    <series_type>1</series_type>
    <series_chapters>0</series_chapters>
    <series_volumes>0</series_volumes>
    <series_status>1</series_status>
    <series_start>1989-08-25</series_start>
    <series_end>0000-00-00</series_end>
    <series_image>https://cdn.myanimelist.net/images/manga/1/157897.jpg</series_image>
    <my_id>0</my_id>
    <my_read_chapters>100</my_read_chapters>
    <my_read_volumes>12</my_read_volumes>
    <my_start_date>2015-02-01</my_start_date>
    <my_finish_date>0000-00-00</my_finish_date>
    <my_score>9</my_score>
    <my_status>1</my_status>
    <my_rereadingg></my_rereadingg>
    <my_rereading_chap>0</my_rereading_chap>
    <my_last_updated>1500000000</my_last_updated>
    <my_tags>dark fantasy</my_tags>
  </manga>
</myanimelist>
"""

ANIME_SEARCH_XML = """<?xml version="1.0" encoding="utf-8"?>
<anime>
  <entry>
    <id>1</id>
    <title>Cowboy Bebop</title>
    <english>Cowboy Bebop</english>
    <synonyms></synonyms>
    <episodes>26</episodes>
    <score>8.81</score>
    <type>TV</type>
    <status>Finished Airing</status>
    <start_date>1998-04-03</start_date>
    <end_date>1999-04-24</end_date>
    <synopsis>In the year 2071...</synopsis>
    <image>https://cdn.myanimelist.net/images/anime/4/19644.jpg</image>
  </entry>
  <entry>
    <id>5</id>
    <title>Cowboy Bebop: Tengoku no Tobira</title>
    <english>Cowboy Bebop: The Movie</english>
    <synonyms>Cowboy Bebop: Knockin' on Heaven's Door; </synonyms>
    <episodes>1</episodes>
    <score>8.41</score>
    <type>Movie</type>
    <status>Finished Airing</status>
    <start_date>2001-09-01</start_date>
    <end_date>0000-00-00</end_date>
    <synopsis>Another day, another bounty...</synopsis>
    <image>https://cdn.myanimelist.net/images/anime/1439/93480.jpg</image>
  </entry>
</anime>
"""

MANGA_SEARCH_XML = """<?xml version="1.0" encoding="utf-8"?>
<manga>
  <entry>
    <id>2</id>
    <title>Berserk</title>
    <synonyms>Berserk: The Prototype</synonyms>
    <chapters>0</chapters>
    <volumes>0</volumes>
    <type>Manga</type>
    <status>Publishing</status>
    <start_date>1989-08-25</start_date>
    <end_date>0000-00-00</end_date>
    <image>https://cdn.myanimelist.net/images/manga/1/157897.jpg</image>
  </entry>
</manga>
"""


class FakeTransport:
    """In-memory stand-in for MALTransport that records what it was asked to send."""

    def __init__(self, username: str = "testuser", base_url: str = "https://mal.test"):
        self.username = username
        self.base_url = base_url
        self.sent = []
        self._responses = []
        self._error = None

    def respond(self, text: str = "", status_code: int = 200) -> "FakeTransport":
        self._responses.append(TransportResponse(status_code, text))
        return self

    def fail_with(self, error: Exception) -> "FakeTransport":
        self._error = error
        return self

    def send(self, request):
        self.sent.append(request)
        if self._error is not None:
            raise self._error
        if self._responses:
            return self._responses.pop(0)
        return TransportResponse(200, "Created")


@pytest.fixture
def transport():
    return FakeTransport()
