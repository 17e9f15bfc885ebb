#!/usr/bin/env python3
"""
Shelf Retrieval Simulation Demo

Runs the discrete-event warehouse simulation: a fleet of robots fetches
shelves to the picker station, returns them and recharges at its home bays.

CLI ARGUMENTS:
    --config FILE           YAML or JSON configuration file
    --robots N              Fleet size (overrides fleet.robot_count)
    --orders N              Number of orders to seed (overrides simulation.order_count)
    --layout FILE           CSV warehouse layout (overrides grid.csv_file)
    --max-ticks N           Stop after this simulated time (overrides simulation.max_ticks)
    --log-level LEVEL       Logging level (overrides system.log_level)

Environment variables prefixed with WAREHOUSE_ override file settings,
e.g. WAREHOUSE_FLEET_ROBOT_COUNT=4.

EXAMPLES:
    python demo_shelf_retrieval.py
    python demo_shelf_retrieval.py --robots 3 --orders 12
    python demo_shelf_retrieval.py --config warehouse.yaml --layout layout.csv
"""
import argparse
import logging
import sys

from config.configuration_provider import ConfigurationProvider
from interfaces.configuration_interface import ConfigurationError, SystemConfig
from interfaces.grid_interface import GridError
from interfaces.robot_pool_interface import RobotPoolError
from simulation.warehouse_simulation import WarehouseSimulation, SimulationReport


def configure_logging(system_config: SystemConfig) -> None:
    handlers = [logging.StreamHandler(sys.stdout)]
    if system_config.log_file:
        handlers.append(logging.FileHandler(system_config.log_file))
    logging.basicConfig(level=getattr(logging, system_config.log_level.upper(), logging.INFO),
                        format=system_config.log_format,
                        handlers=handlers)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Warehouse shelf retrieval simulation")
    parser.add_argument("--config", type=str, default=None,
                        help="YAML or JSON configuration file")
    parser.add_argument("--robots", type=int, default=None,
                        help="Number of robots in the fleet")
    parser.add_argument("--orders", type=int, default=None,
                        help="Number of retrieval orders to seed")
    parser.add_argument("--layout", type=str, default=None,
                        help="CSV warehouse layout file")
    parser.add_argument("--max-ticks", type=int, default=None,
                        help="Simulated time limit in ticks")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    return parser


def apply_overrides(provider: ConfigurationProvider, args: argparse.Namespace) -> None:
    overrides = {
        "fleet.robot_count": args.robots,
        "simulation.order_count": args.orders,
        "grid.csv_file": args.layout,
        "simulation.max_ticks": args.max_ticks,
        "system.log_level": args.log_level,
    }
    for key, value in overrides.items():
        if value is not None:
            provider.set_value(key, value)


def print_report(report: SimulationReport) -> None:
    print()
    print("Simulation Report")
    print("=" * 40)
    print(f"Final time:            t={report.final_time}")
    print(f"Dispatches:            {report.dispatch_count}")
    print(f"Orders submitted:      {report.orders_submitted}")
    print(f"Retrievals completed:  {report.retrievals_completed}")
    print(f"Deferrals:             {report.deferral_count}")
    print(f"Events still pending:  {report.pending_events}")
    print(f"Items picked:          {', '.join(report.picked_items) or '-'}")
    print(f"Short picks:           {', '.join(report.short_picks) or '-'}")
    for sku in sorted(set(report.picked_items) | set(report.short_picks)):
        stock = report.inventory_summary[sku]
        print(f"   {sku}: {stock['quantity']} left on shelf at {stock['location']}")
    fleet = report.fleet_status
    print(f"Fleet:                 {fleet['available']} available, "
          f"{fleet['working']} working, {fleet['charging']} charging")
    for robot in fleet['robots']:
        print(f"   robot {robot['robot_id']:>2}: {robot['state']:<9} at {robot['location']} "
              f"charge {robot['charge_level']}")


def main() -> int:
    args = build_parser().parse_args()

    try:
        provider = ConfigurationProvider(config_file=args.config)
        apply_overrides(provider, args)
        configure_logging(provider.get_system_config())

        simulation = WarehouseSimulation(provider)
        simulation.seed_orders()
        report = simulation.run()
    except (ConfigurationError, GridError, RobotPoolError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print_report(report)
    return 0 if report.all_orders_completed else 1


if __name__ == "__main__":
    sys.exit(main())
