import requests
from colorama import Fore
from discord_webhook import DiscordWebhook


def log_to_discord(message, image, webhooks, filename='Alert.png'):
    """Posts the caption with the card attached to every webhook. Returns how many went through."""
    sent = 0
    for hook in webhooks:
        webhook = DiscordWebhook(url=hook, content=message)
        webhook.add_file(file=image, filename=filename)
        try:
            response = webhook.execute()
        except requests.RequestException as e:
            print(Fore.RED + f"Error sending to webhook! {e}" + Fore.RESET)
            continue
        if response is not None and getattr(response, 'status_code', 200) >= 300:
            print(Fore.RED + f"Webhook {hook} returned {response.status_code}" + Fore.RESET)
            continue
        print(Fore.GREEN + f"Sent to Discord webhook {hook} successfully!" + Fore.RESET)
        sent += 1
    return sent
