from typing import Optional

import numpy as np
import requests

from match_the_pair.circles import load_image
from match_the_pair.errors import SubmissionRejectedError

BASE_URL = "http://asis-ctf.ir:12443"

# not sure if User-Agent is required but the cookie definitely is, otherwise
# every picture is a black circle unrelated to the current level
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 6.3; WOW64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/37.0.2062.124 Safari/537.36"
)
COOKIE = (
    "sessionid=o4vshsd1ac158q9xz1txni9o06xkc2jz; "
    "PHPSESSID=tt5bifrgddqkts7ddu43tkdhq5; "
    "csrftoken=LBCcpn8rh8Rz04PEJxt7KCevc7LihNMp"
)

REJECTIONS = ('"e"', '"slow"')


class ChallengeClient:
    def __init__(
        self,
        base_url: str = BASE_URL,
        cookie: str = COOKIE,
        user_agent: str = USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent, "Cookie": cookie})

    def _get(self, path: str, **params) -> requests.Response:
        resp = self.session.get(f"{self.base_url}{path}", params=params or None)
        resp.raise_for_status()
        return resp

    def visit_index(self):
        # the index page has to be loaded before every level, otherwise the
        # server never lets us past level 2
        self._get("/")

    def download_image(self, image_id: int) -> np.ndarray:
        return load_image(self._get(f"/pic/{image_id}").content)

    def submit(self, first: int, second: int) -> str:
        # first and second are image ids in range 0-15
        result = self._get("/send", first=first, second=second).text.strip()
        if result in REJECTIONS:
            raise SubmissionRejectedError(first, second, result)
        return result
