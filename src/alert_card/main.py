import argparse
import asyncio
import datetime
import os
import re
import time
import uuid

import requests
from colorama import Fore, Back, Style

from alert_card import config_manager
from alert_card.constants import NWS_USER_AGENT
from alert_card.integrations.discord import log_to_discord
from alert_card.models import Alert
from alert_card.pipeline import render_alerts
from alert_card.utils.error_handler import report_error
from alert_card.utils.posted_log import PostedAlerts


def get_nws_alerts(cfg):
    """Gets NWS Alerts from the API

    Args:
        cfg (module): loaded config, for the url/area/sender/event filters

    Returns:
        list of Alert: active polygon alerts of the monitored types from the monitored office
    """
    print(Fore.CYAN + f'Checking {cfg.NWS_ALERTS_URL} at {datetime.datetime.now(datetime.timezone.utc).strftime("%H:%M:%Sz %m/%d")}' + Fore.RESET)
    try:
        response = requests.get(
            cfg.NWS_ALERTS_URL,
            params={'area': cfg.ALERT_AREA} if cfg.ALERT_AREA else None,
            headers={'User-Agent': NWS_USER_AGENT},
            timeout=cfg.FETCH_TIMEOUT,
        )
        response.raise_for_status()
        features = response.json().get('features', [])
    except (requests.RequestException, ValueError) as e:
        print(Back.RED + f'Error fetching NWS alerts: {e}' + Back.RESET)
        return []

    alerts = []
    for feature in features:
        properties = feature.get('properties', {})
        event_type = properties.get('event')
        sender = properties.get('senderName') or ''
        geometry = feature.get('geometry')
        if event_type not in cfg.ALERT_TYPES_TO_MONITOR or cfg.SENDER_FILTER not in sender:
            continue
        if not geometry or not geometry.get('coordinates'): #zone based, nothing to frame the map on
            continue
        try:
            alerts.append(Alert.from_feature(feature))
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            print(Fore.RED + f'Skipping malformed alert {properties.get("id")}: {e}' + Fore.RESET)
            continue
        print("Matching alert found: " + Fore.YELLOW + f"{event_type} - " + Fore.MAGENTA + f"{sender}" + Fore.RESET)
    print(Back.GREEN + f"Returning {len(alerts)} filtered alerts. Total processed: {len(features)}" + Back.RESET)
    return alerts


def clean_filename(name):
    return re.sub(r'[<>:"/\\|?*.]', '', name)


def output_path_for(alert_id, output_dir):
    """unique per render, so two renders of the same alert never overwrite each other"""
    stamp = datetime.datetime.now(datetime.timezone.utc).strftime('%Y%m%dT%H%M%S%fZ')
    return os.path.join(output_dir, f'alert_{clean_filename(alert_id)}_{stamp}_{uuid.uuid4().hex[:6]}.png')


def check_alerts(cfg, posted_alerts):
    """One scan: fetch, render anything new, write/post it, and mark it posted.

    Failed renders are reported and left unmarked so they get retried next scan.

    Returns:
        list of str: paths of the cards written this scan
    """
    new_alerts = [alert for alert in get_nws_alerts(cfg) if alert.id not in posted_alerts]
    if not new_alerts:
        return []
    for alert in new_alerts:
        print(Fore.LIGHTYELLOW_EX + f'New Alert: {alert.event} | {alert.area_desc}' + Fore.RESET)

    results = asyncio.run(render_alerts(new_alerts, cfg.MAPBOX_TOKEN, config_manager.render_config(cfg)))

    written = []
    for alert, result in zip(new_alerts, results):
        if isinstance(result, BaseException):
            print(Back.RED + f'Error generating card for {alert.id}: {type(result).__name__}: {result}' + Back.RESET)
            report_error(result, f'render of {alert.id}', cfg.ERROR_WEBHOOK, cfg.DISCORD_PINGS_ALL)
            continue
        path = output_path_for(alert.id, cfg.OUTPUT_DIR)
        try:
            with open(path, 'wb') as f:
                f.write(result.image)
        except OSError as e:
            print(Back.RED + f'Error saving card for {alert.id} to {path}: {e}' + Back.RESET)
            report_error(e, f'saving card for {alert.id}', cfg.ERROR_WEBHOOK, cfg.DISCORD_PINGS_ALL)
            continue
        print(Fore.LIGHTGREEN_EX + f'Card saved to {path}' + Fore.RESET)
        if cfg.POST_TO_DISCORD:
            log_to_discord(result.caption, result.image, cfg.WEBHOOKS)
        posted_alerts.add(alert.id)
        written.append(path)
    return written


def main(argv=None):
    available_configs = config_manager.get_available_configs()
    parser = argparse.ArgumentParser(description='Alert card generator')
    parser.add_argument(
        '--config',
        required=True,
        type=str,
        choices=available_configs,
        help=f"The name of the configuration to use. Available: {', '.join(available_configs)}"
    )
    parser.add_argument('--once', action='store_true', help='run a single scan and exit')
    args = parser.parse_args(argv)

    cfg = config_manager.load(args.config)
    os.makedirs(cfg.OUTPUT_DIR, exist_ok=True)
    if not cfg.MAPBOX_TOKEN:
        print(Back.YELLOW + Fore.BLACK + 'MAPBOX_TOKEN is not set, backdrop requests will fail' + Style.RESET_ALL)
    posted_alerts = PostedAlerts(cfg.LOG_FILE, max_age=cfg.POSTED_MAX_AGE, max_size=cfg.POSTED_MAX_SIZE)

    print(Fore.MAGENTA + f'Alert watcher started... checking every {cfg.CHECK_INTERVAL}s' + Fore.RESET)
    try:
        while True:
            check_alerts(cfg, posted_alerts)
            if args.once:
                break
            print(Fore.LIGHTCYAN_EX + f'End scan. Rescan in {cfg.CHECK_INTERVAL}s' + Fore.RESET)
            time.sleep(cfg.CHECK_INTERVAL)
    except KeyboardInterrupt:
        print(Fore.YELLOW + 'Stopped.' + Fore.RESET)
    except Exception as e:
        print(Back.RED + f"Fatal error: {e}" + Back.RESET)
        report_error(e, 'Top-level main()', cfg.ERROR_WEBHOOK, cfg.DISCORD_PINGS_ALL)
        raise


if __name__ == '__main__':
    main()
