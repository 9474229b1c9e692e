"""
Jinja2 templates for the installation summary and troubleshooting checklists.
"""
from typing import List

from jinja2 import Template

SUMMARY_TEMPLATE = """
Installation Summary:
  - Environment: {{ environment }}
{%- if show_base_url %}
  - Base URL: {{ base_url }}
{%- endif %}
  - Git Service: {{ git_service }}
  - Database: {{ 'Default configuration' if use_default_db else 'Custom configuration' }}

Access URLs:
  - Web Interface: {{ base_url }}
  - Grafana Dashboard: {{ grafana_url }}
  - RabbitMQ Management: {{ rabbitmq_url }}

Next Steps:
  1. Access the web interface
  2. Set up your first user
  3. Start using Kodus!
"""

# One checklist item per line; blank lines are dropped.
HINT_TEMPLATES = {
    "service_timeout": """
Check {{ service }} logs: {{ compose }} logs {{ service }}
Verify {{ service }} container is running: {{ compose }} ps {{ service }}
""",
    "critical_log": """
Check if the database passwords in {{ env_file }} match the ones in your database
Verify if the database containers are running: {{ compose }} ps
Check database logs: {{ compose }} logs {{ databases | join(' ') }}
""",
    "database_connection": """
Check the {{ service }} logs: {{ compose }} logs {{ service }}
Verify all required services are running: {{ compose }} ps
Try restarting the services: {{ compose }} restart
""",
}


def render_summary(**context) -> str:
    return Template(SUMMARY_TEMPLATE).render(**context).strip("\n")


def render_hints(kind: str, **context) -> List[str]:
    """
    Renders a troubleshooting checklist.

    :param kind: Key into HINT_TEMPLATES.
    :param context: Template variables.
    :return: The checklist lines.
    """
    rendered = Template(HINT_TEMPLATES[kind]).render(**context)
    return [line.strip() for line in rendered.splitlines() if line.strip()]
