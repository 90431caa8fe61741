from dataclasses import dataclass

from django.conf import settings


@dataclass(frozen=True)
class EhourConfig:
    """Application wide configuration, read from ``settings.EHOUR``"""
    complete_day_hours: float = 8.0
    first_day_of_week: int = 1
    date_format: str = '%d %b %Y'
    show_turnover: bool = True
    currency: str = 'EUR'
    mail_from: str = 'noreply@ehour.local'


def get_config():
    values = getattr(settings, 'EHOUR', {})

    return EhourConfig(
        complete_day_hours=float(values.get('COMPLETE_DAY_HOURS', 8.0)),
        first_day_of_week=int(values.get('FIRST_DAY_OF_WEEK', 1)),
        date_format=values.get('DATE_FORMAT', '%d %b %Y'),
        show_turnover=bool(values.get('SHOW_TURNOVER', True)),
        currency=values.get('CURRENCY', 'EUR'),
        mail_from=values.get('MAIL_FROM', 'noreply@ehour.local'),
    )
