import re
from decimal import Decimal
from colorama import Fore

from alert_card.constants import NOT_AVAILABLE, NO_TORNADO
from alert_card.models import ThreatSummary, TornadoStatus

#english NWS phrasing only, anything else (metric, odd wording) just comes back as absent
WIND_PATTERN = re.compile(r'winds?\s+(?:up\s+to|around)?\s?(\d{2,3})\s?mph', re.IGNORECASE)
HAIL_PATTERN = re.compile(r'(\d+(?:\.\d+)?|\.\d+)[\s-]?(?:inch|in)\s+hail', re.IGNORECASE)
MOTION_PATTERN = re.compile(r'moving\s+([a-zA-Z]+)\s+at\s+(\d+)\s?mph', re.IGNORECASE)


def is_tornado_event(event):
    return 'TORNADO WARNING' in (event or '').upper()


def is_severe_event(event):
    """tor or svr, the two that get the hazard grid"""
    upper = (event or '').upper()
    return 'TORNADO WARNING' in upper or 'SEVERE THUNDERSTORM WARNING' in upper


def get_tornado_status(description, event):
    if not is_tornado_event(event):
        return TornadoStatus.NONE
    #NWS tags are upper case ("TORNADO...OBSERVED"), so this is case sensitive on purpose
    if 'OBSERVED' in description:
        return TornadoStatus.OBSERVED
    if 'RADAR' in description:
        return TornadoStatus.RADAR_INDICATED
    return TornadoStatus.POSSIBLE


def get_threat_summary(description, event):
    """Using Regex, pulls the hazard facts for the badge grid out of the alert narrative.

    Each field is matched on its own, a missing wind value doesn't stop hail from being found.

    Args:
        description (str): alert description text
        event (str): alert event type (Tornado Warning, Severe Thunderstorm Warning, etc)

    Returns:
        ThreatSummary: tornado status, wind (mph), hail (in) and storm motion
    """
    description = description or ''
    wind_match = WIND_PATTERN.search(description)
    hail_match = HAIL_PATTERN.search(description)
    motion_match = MOTION_PATTERN.search(description)

    summary = ThreatSummary(
        tornado_status=get_tornado_status(description, event),
        wind_mph=int(wind_match.group(1)) if wind_match else None,
        hail_inches=Decimal(hail_match.group(1)) if hail_match else None,
        motion=(motion_match.group(1), int(motion_match.group(2))) if motion_match else None,
    )
    print(Fore.LIGHTBLUE_EX + f'Threats for {event}: {summary}' + Fore.RESET)
    return summary


def format_threat_values(summary):
    """Label/value pairs for the 2x2 grid, in drawing order. Missing values get an explicit marker
    so the layout never changes shape.

    Returns:
        list of (label, value) tuples: TORNADO, WIND, HAIL, MOTION
    """
    if summary.tornado_status is TornadoStatus.NONE:
        tornado = NO_TORNADO
    else:
        tornado = summary.tornado_status.value
    wind = f'{summary.wind_mph} mph' if summary.wind_mph is not None else NOT_AVAILABLE
    hail = f'{summary.hail_inches} in"' if summary.hail_inches is not None else NOT_AVAILABLE
    if summary.motion:
        direction, speed = summary.motion
        motion = f'{direction} {speed} mph'
    else:
        motion = NOT_AVAILABLE
    return [
        ('TORNADO', tornado),
        ('WIND', wind),
        ('HAIL', hail),
        ('MOTION', motion),
    ]
