from datetime import date, timedelta


def get_week_start(day, first_day_of_week=1):
    """First day of the week containing ``day``; weekdays are ISO numbered, 1 = Monday"""
    offset = (day.isoweekday() - first_day_of_week) % 7
    return day - timedelta(days=offset)


def get_week_start_end_dates(day, first_day_of_week=1):
    week_start = get_week_start(day, first_day_of_week)
    return week_start, week_start + timedelta(days=6)


def create_date_sequence(date_start, date_end):
    days = []
    day = date_start

    while day <= date_end:
        days.append(day)
        day += timedelta(days=1)

    return days


def day_in_week(day):
    """0 = Sunday ... 6 = Saturday"""
    return day.isoweekday() % 7


def get_week_number(day, first_day_of_week=1):
    """
    Week number of ``day``.

    Monday based weeks follow ISO 8601. For other week starts the week
    holding January 1st is week 1.
    """
    if first_day_of_week == 1:
        return day.isocalendar()[1]

    week_start = get_week_start(day, first_day_of_week)
    year = (week_start + timedelta(days=6)).year
    first_week_start = get_week_start(date(year, 1, 1), first_day_of_week)
    return (week_start - first_week_start).days // 7 + 1


def format_date_key(day):
    """Key used to look up entries per day"""
    return day.isoformat()


def format_week_range(week_start, date_format='%d %b %Y'):
    week_end = week_start + timedelta(days=6)
    return f"{week_start.strftime(date_format)} - {week_end.strftime(date_format)}"
