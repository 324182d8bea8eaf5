import traceback
import datetime
import json

import requests
from colorama import Fore


def report_error(error, context, webhook_url, mention_roles=()):
    '''send discord message when a render (or anything else) errors out. Never raises.'''
    if not webhook_url:
        print(Fore.YELLOW + f"No error webhook configured, not reporting {type(error).__name__} in {context}" + Fore.RESET)
        return False
    try:
        tb_str = ''.join(traceback.format_exception(type(error), error, getattr(error, "__traceback__", None)))
        timestamp = datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%d %H:%M:%SZ")
        mentions_text = ' '.join([f"<@&{role}>" for role in mention_roles])

        message = (
            f"🚨 **ERROR in {context}** 🚨\n"
            f"**Time (UTC):** {timestamp}\n"
            f"**Error Type:** {type(error).__name__}\n"
            f"**Details:** ```{str(error)}```\n"
            f"**Traceback:** ```{tb_str[-1500:]}```"
            f"{mentions_text}\n"
        )
        payload = {
            "content": message,
            "username": "error-bot"
        }
        response = requests.post(
            webhook_url,
            data=json.dumps(payload),
            headers={"Content-Type": "application/json"},
            timeout=10,
        )

        if response.status_code >= 300:
            print(Fore.RED + f"Discord webhook failed: {response.status_code} {response.text}" + Fore.RESET)
            return False
        print(Fore.GREEN + "Error reported to Discord successfully." + Fore.RESET)
        return True
    except requests.RequestException as discord_error:
        print(Fore.RED + f"Failed to send error to Discord: {discord_error}" + Fore.RESET)
        return False
