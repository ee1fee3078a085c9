"""
Rendering of the vehicle responsibility term.
"""
from string import Template

from fleetdesk.core.term import TermFields

TERM_TEMPLATE = Template("""\
VEHICLE RESPONSIBILITY TERM

I, $driver_name, CPF $driver_id, holder of a driver license valid until
$date_string, declare that I received the vehicle $vehicle_model, plate
$plate, in the condition recorded in the delivery checklist, and take
responsibility for its use and care while it is assigned to me.


______________________________
$short_name
""")


class PlainTextTermRenderer:
    media_type = "text/plain; charset=utf-8"

    def __init__(self, template: Template = TERM_TEMPLATE):
        self.template = template

    def render(self, fields: TermFields) -> str:
        return self.template.substitute(
            driver_name=fields.driver_name,
            driver_id=fields.driver_id,
            date_string=fields.date_string,
            vehicle_model=fields.vehicle_model,
            plate=fields.plate,
            short_name=fields.short_name,
        )
