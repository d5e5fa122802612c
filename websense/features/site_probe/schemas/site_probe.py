from typing import Optional

from websense.platform.schemas import CamelModel


class SiteProbeResult(CamelModel):
    url: str
    status_code: Optional[int] = None
    accessible: bool = False
    message: str
