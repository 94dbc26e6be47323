"""
Complete system check walking through a simulated care day.

This script exercises:
1. Configuration loading and validation
2. Feeding, medication and notes with cap enforcement
3. Alert evaluation as the clock passes the thresholds
4. The midnight reset after a multi-day clock jump
5. Unknown-animal error reporting

Run with: uv run python system_check.py
"""

from datetime import UTC, datetime, timedelta

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from petcare.config import get_config, print_config_summary, validate_config
from petcare.domain.models import AlertKind, PetNotFoundError
from petcare.observability import configure_logging
from petcare.services.care_service import PetCareService

console = Console()


class SimulatedClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def _status_table(service: PetCareService, title: str) -> Table:
    table = Table(title=title)
    table.add_column("Pet", style="cyan")
    table.add_column("Alert", style="magenta")
    table.add_column("Message", style="white")
    for pet_id, status in service.get_all_statuses().items():
        table.add_row(pet_id, status.kind.value, status.message)
    return table


def check_configuration() -> bool:
    """Check configuration loading and validation."""

    console.print(Panel("🔧 Checking Configuration", style="blue"))

    try:
        validate_config()
        print_config_summary()
        console.print("✅ Configuration loaded successfully", style="green")
        return True

    except Exception as e:
        console.print(f"❌ Configuration check failed: {e}", style="red")
        return False


def check_daily_actions(service: PetCareService, clock: SimulatedClock) -> bool:
    """Feed and medicate until the caps are reached."""

    console.print(Panel("🍽️ Checking Daily Actions", style="blue"))

    try:
        for _ in range(5):
            record = service.apply_action("tutu", "feed").unwrap()
            clock.advance(minutes=30)
        for _ in range(3):
            record = service.apply_action("tutu", "medicate").unwrap()
        record = service.apply_action("tutu", "annotate", "  Ate everything  ").unwrap()
        noah = service.apply_action("noah", "medicate").unwrap()

        table = Table(title="Tutu after the morning")
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("Meals", f"{record.feed_count}/{record.max_feed}")
        table.add_row("Doses", f"{record.medication_count}/{record.max_medication}")
        table.add_row("Notes", "; ".join(n.text for n in record.notes))
        console.print(table)

        ok = (
            record.feed_count == record.max_feed
            and record.medication_count == record.max_medication
            and [n.text for n in record.notes] == ["Ate everything"]
            and noah.last_medication_time is None
        )
        if ok:
            console.print("✅ Caps enforced", style="green")
        else:
            console.print("❌ Caps not enforced", style="red")
        return ok

    except Exception as e:
        console.print(f"❌ Daily action check failed: {e}", style="red")
        return False


def check_alerts(service: PetCareService, clock: SimulatedClock) -> bool:
    """Move the clock past the food threshold and look at the statuses."""

    console.print(Panel("🚨 Checking Alerts", style="blue"))

    try:
        console.print(_status_table(service, "Right after the morning round"))
        clock.advance(hours=9)
        console.print(_status_table(service, "Nine hours later"))

        statuses = service.get_all_statuses()
        ok = statuses["tutu"].kind is AlertKind.FOOD and statuses["noah"].kind is AlertKind.OK
        if ok:
            console.print("✅ Alert priorities hold", style="green")
        else:
            console.print("❌ Unexpected alerts", style="red")
        return ok

    except Exception as e:
        console.print(f"❌ Alert check failed: {e}", style="red")
        return False


def check_midnight_reset(service: PetCareService, clock: SimulatedClock) -> bool:
    """Jump three days ahead and confirm a single reset."""

    console.print(Panel("🌙 Checking Midnight Reset", style="blue"))

    try:
        before = service.scheduler.last_reset_day
        clock.advance(days=3)
        record = service.get_pet("tutu").unwrap()
        after = service.scheduler.last_reset_day

        console.print(f"Last reset day: {before} -> {after}", style="yellow")
        ok = (
            record.feed_count == 0
            and record.last_feed_time is None
            and record.medication_count == 0
            and (after - before).days == 3
        )
        if ok:
            console.print("✅ Counters reset", style="green")
        else:
            console.print("❌ Counters not reset", style="red")
        return ok

    except Exception as e:
        console.print(f"❌ Reset check failed: {e}", style="red")
        return False


def check_error_handling(service: PetCareService) -> bool:
    """Unknown animals come back as errors, never as silent successes."""

    console.print(Panel("🛡️ Checking Error Handling", style="blue"))

    result = service.apply_action("garfield", "feed")
    if result.is_err() and isinstance(result.unwrap_err(), PetNotFoundError):
        console.print(f"✅ {result.unwrap_err()}", style="green")
        return True
    console.print("❌ Unknown animal was not reported", style="red")
    return False


def run_all_checks() -> None:
    """Run all system checks."""

    console.print(Panel("🐾 PetCare Hub - System Check", style="bold blue"))

    config = get_config()
    configure_logging(config.logging)
    clock = SimulatedClock(datetime(2025, 6, 2, 7, 0, tzinfo=UTC))
    service = PetCareService.from_config(config, clock=clock)

    checks = [
        ("Configuration", check_configuration),
        ("Daily Actions", lambda: check_daily_actions(service, clock)),
        ("Alerts", lambda: check_alerts(service, clock)),
        ("Midnight Reset", lambda: check_midnight_reset(service, clock)),
        ("Error Handling", lambda: check_error_handling(service)),
    ]

    results = []

    for check_name, check_func in checks:
        console.print(f"\n{'=' * 60}")
        try:
            results.append((check_name, check_func()))
        except KeyboardInterrupt:
            console.print("\n⏹️  Checks interrupted by user", style="yellow")
            break
        except Exception as e:
            console.print(f"❌ {check_name} failed with exception: {e}", style="red")
            results.append((check_name, False))

    # Summary
    console.print(f"\n{'=' * 60}")
    console.print(Panel("📋 Check Results Summary", style="bold"))

    summary_table = Table()
    summary_table.add_column("Check", style="cyan")
    summary_table.add_column("Result", style="white")

    passed = 0
    for check_name, result in results:
        if result:
            summary_table.add_row(check_name, "✅ PASSED")
            passed += 1
        else:
            summary_table.add_row(check_name, "❌ FAILED")

    console.print(summary_table)
    console.print(f"\n🎯 Results: {passed}/{len(results)} checks passed")


if __name__ == "__main__":
    try:
        run_all_checks()
    except KeyboardInterrupt:
        console.print("\n👋 Checks stopped by user", style="yellow")
