import json
import os

env = {}

if os.path.isfile('env.json'):
    with open('env.json') as f:
        env = json.loads(f.read())


def setting(name: str, default=None):
    return os.environ.get(name, env.get(name, default))


def user_agent() -> str:
    return setting('USER_AGENT', 'SkinTailor')


def request_timeout() -> float:
    return float(setting('REQUEST_TIMEOUT', 10))


def sentry_dsn():
    if setting('DEV', None) == 'DEV':
        return None

    return setting('SENTRY_DSN', None)
