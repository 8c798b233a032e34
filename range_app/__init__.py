from flask import Blueprint

range_bp = Blueprint(
    "range",
    __name__,
    template_folder="../templates/range",
)

from . import routes  # noqa
