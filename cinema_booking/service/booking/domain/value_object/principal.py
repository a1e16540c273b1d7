from typing import Optional

import attrs


@attrs.define(frozen=True)
class Principal:
    """Signed-in user as asserted by the identity provider"""

    id: str
    display_name: Optional[str] = None
    email: Optional[str] = None
