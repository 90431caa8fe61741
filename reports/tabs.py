from ehour_backend.resources import get_message
from . import aggregates


class ReportTab:
    """A report tab; its panel is only built when requested"""

    def __init__(self, key, title_key, panel_factory):
        self.key = key
        self.title_key = title_key
        self._panel_factory = panel_factory

    def __repr__(self):
        return f"<ReportTab {self.key}>"

    @property
    def title(self):
        return get_message(self.title_key)

    def get_panel(self):
        return self._panel_factory()


class DefaultReportTabBuilder:

    def __init__(self, config):
        self.config = config

    def create_report_tabs(self, criteria):
        tabs = [
            ReportTab('customer', 'report.title.customer',
                      lambda: self._panel(aggregates.customer_aggregate, criteria)),
            ReportTab('project', 'report.title.project',
                      lambda: self._panel(aggregates.project_aggregate, criteria)),
        ]

        if not criteria.is_for_individual_user:
            tabs.append(ReportTab('employee', 'report.title.employee',
                                  lambda: self._panel(aggregates.employee_aggregate, criteria)))

        tabs.append(ReportTab('detailed', 'report.title.detailed',
                              lambda: self._panel(aggregates.detailed_report, criteria)))

        return tabs

    def _panel(self, report, criteria):
        rows = report(criteria, show_turnover=self.config.show_turnover)

        return {
            'rows': rows,
            'total_hours': sum(row['hours'] or 0 for row in rows),
        }
