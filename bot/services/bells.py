from typing import Optional

from bot.services.site import SiteConfig


def resolve_bells(number: Optional[int], weekday_token: str, site: SiteConfig) -> str:
    """Час пари за її номером. Для першого дня тижня — окрема таблиця дзвінків."""
    if number is None:
        return ""
    table = site.bells_monday if weekday_token == site.first_weekday else site.bells
    return table.get(number, "")
