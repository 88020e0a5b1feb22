import csv
import logging
import os
import random
import time

from points.models import PlannerError
from progress.models import NextStopStatus
from progress.session import RouteSession
from routing.policy import RoutePolicy
from sources.loader import load_canonical_points

NEXT_STOP_MESSAGES = {
    NextStopStatus.NO_ROUTE: "Pick a start point first.",
    NextStopStatus.ALL_DONE: "All coffee shops visited!",
    NextStopStatus.LIMITED_BY_DISTANCE: "Route is limited by distance. Raise the limit to see the next shop.",
    NextStopStatus.MARK_VISITED: "Mark visited shops to see the next one.",
}

def run_simulation(sources=None, max_step_km=2.0, visits=5, seed=42):
    print("=== STARTING ROUTE SIMULATION ===")

    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    # 1. Load Data
    start_time = time.time()
    try:
        dedup = load_canonical_points(sources)
    except PlannerError as error:
        print(f"[FAILED] Could not load coffee shops: {error}")
        return None
    print(
        f"Loaded {len(dedup.points)} unique shops in {time.time() - start_time:.2f}s "
        f"({dedup.rejected_rows} rows rejected, {dedup.bucket_merges + dedup.proximity_merges} duplicates merged).\n"
    )

    # 2. Configure System
    session = RouteSession(points=dedup.points, policy=RoutePolicy())
    session.set_max_step(max_step_km)

    # 3. Plan from the preferred start (or a random shop)
    rng = random.Random(seed)
    start = session.default_start(rng)
    start_time = time.time()
    planned = session.set_start(start)
    print(f"Start: {start}")
    print(f"Planned {len(planned.route)} stops, {planned.total_km:.1f} km in {time.time() - start_time:.2f}s.")
    if planned.relaxed:
        print(f"No shop within {session.constraint.max_step_km} km of the start, distance limit was bypassed.")
    print()

    # 4. Walk part of the route
    for _ in range(min(visits, len(planned.route))):
        stop = session.next_stop()
        session.mark_completed(stop)
        print(f"[VISITED] {stop.name} - {stop.address}")

    next_stop = session.next_stop()
    if next_stop:
        print(f"\nNext stop: {next_stop.name} - {next_stop.address}")
    else:
        print(f"\n{NEXT_STOP_MESSAGES[session.next_stop_status()]}")

    # 5. Write the route list next to the script
    output_path = os.path.join(base_dir, "route_results.csv")
    with open(output_path, "w", newline='', encoding="utf-8") as file:
        writer = csv.writer(file)
        writer.writerow(["position", "name", "address", "latitude", "longitude", "visited"])
        for entry in session.ordered_entries():
            writer.writerow([
                entry.index + 1,
                entry.point.name,
                entry.point.address,
                entry.point.lat,
                entry.point.lon,
                entry.completed,
            ])

    summary = session.progress()
    print("\n=== SIMULATION COMPLETE ===")
    print(f"Visited: {summary.completed} / {summary.total}")
    print(f"Remaining: {summary.remaining}")
    print(f"Route length: {summary.distance_km:.1f} km")
    print("Results written to 'route_results.csv'.")
    return session

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    run_simulation()
