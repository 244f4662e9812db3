from datetime import datetime

import pytz


def utc(*args):
    return pytz.UTC.localize(datetime(*args))


# Asia/Kolkata is UTC+05:30 all year.
def ist(hour, minute, day=(2026, 3, 10)):
    local = pytz.timezone("Asia/Kolkata").localize(datetime(*day, hour, minute))
    return local.astimezone(pytz.UTC)
