"""Aggregation and formatting of CodePush release install metrics."""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional, Sequence

from rich.markup import escape

from .api_client import AggregatedMetric, Release, ReleaseMetric
from .date_helper import format_date

NO_UPDATES_RELEASED = "[magenta]No updates released[/magenta]"
NO_INSTALLS_RECORDED = "[magenta]No installs recorded[/magenta]"


def total_active(metrics: Sequence[ReleaseMetric]) -> int:
    """Active installs summed over every release of the deployment."""
    return sum(metric.active for metric in metrics)


def find_release_metric(
    metrics: Sequence[ReleaseMetric], label: str
) -> Optional[ReleaseMetric]:
    return next((metric for metric in metrics if metric.label == label), None)


def to_precision(value: float, precision: int) -> str:
    """Format ``value`` with ``precision`` significant digits.

    Matches JavaScript's ``Number.prototype.toPrecision``: the exact binary
    value is rounded half up, and exponential notation is used when the
    decimal exponent is below -6 or not below ``precision``.
    """
    if precision < 1:
        raise ValueError("precision must be at least 1")

    with localcontext() as ctx:
        ctx.prec = 100
        number = Decimal(value)
        sign = "-" if number < 0 else ""
        number = abs(number)
        if number == 0:
            return sign + _place_point("0" * precision, 0, precision)

        exponent = number.adjusted()
        rounded = number.scaleb(precision - 1 - exponent).quantize(
            Decimal(1), rounding=ROUND_HALF_UP
        )
        if rounded >= 10**precision:
            # Rounding carried into a new digit, e.g. 99.5 -> 100
            exponent += 1
            rounded = number.scaleb(precision - 1 - exponent).quantize(
                Decimal(1), rounding=ROUND_HALF_UP
            )

    return sign + _place_point(str(int(rounded)), exponent, precision)


def _place_point(digits: str, exponent: int, precision: int) -> str:
    if exponent < -6 or exponent >= precision:
        mantissa = digits[0] + ("." + digits[1:] if precision > 1 else "")
        return f"{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"
    if exponent >= 0:
        whole, fraction = digits[: exponent + 1], digits[exponent + 1 :]
        return whole + ("." + fraction if fraction else "")
    return "0." + "0" * (-exponent - 1) + digits


def format_active_percent(active: int, releases_total_active: int) -> str:
    """Share of the deployment's active installs running one release."""
    if releases_total_active != 0:
        active_percent = active / releases_total_active * 100
    else:
        active_percent = 0.0

    if active_percent == 100.0:
        return "100%"
    if active_percent == 0.0:
        return "0%"
    return to_precision(active_percent, 2) + "%"


def generate_metrics_string(
    release_metric: Optional[ReleaseMetric], releases_total_active: int
) -> str:
    """Install Metrics cell for the latest release of a deployment."""
    if release_metric is None:
        return NO_INSTALLS_RECORDED

    percent = format_active_percent(release_metric.active, releases_total_active)
    metrics_string = (
        f"[green]Active: [/green]{percent} "
        f"({release_metric.active} of {releases_total_active})\n"
    )

    # installed is None when the backend does not track it for this release
    if release_metric.installed is not None:
        metrics_string += f"[green]Installed: [/green]{release_metric.installed}"

        pending = (
            release_metric.downloaded - release_metric.installed - release_metric.failed
        )
        if pending != 0:
            metrics_string += f" ({pending} pending)"

    return metrics_string


def generate_metadata_string(release: Release) -> str:
    """Update Metadata cell: five labelled lines, the last one unterminated."""
    release_time = format_date(release.uploadTime) if release.uploadTime else ""
    lines = [
        f"[green]Label: [/green]{escape(release.label)}",
        f"[green]App Version: [/green]{escape(release.targetBinaryRange or '')}",
        f"[green]Mandatory: [/green]{'Yes' if release.isMandatory else 'No'}",
        f"[green]Release Time: [/green]{release_time}",
        f"[green]Released By: [/green]{escape(release.releasedBy or '')}",
    ]
    return "\n".join(lines)


def aggregate_metrics(metrics: Sequence[ReleaseMetric]) -> Optional[AggregatedMetric]:
    """Machine-readable metrics: the most recent entry plus the active total.

    Returns None when no metrics were recorded for the deployment.
    """
    if not metrics:
        return None

    latest = metrics[-1]
    return AggregatedMetric(
        active=latest.active,
        downloaded=latest.downloaded,
        installed=latest.installed,
        failed=latest.failed,
        totalActive=total_active(metrics),
    )
