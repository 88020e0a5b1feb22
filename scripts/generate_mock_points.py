import pandas as pd
import numpy as np

def generate_mock_points(num_shops=120, output_file="surf.csv", seed=None):
    """
    Generates a noisy coffee shop export designed to exercise normalization and dedup.
    Every shop appears one to three times: exact re-exports, re-exports a few metres
    away (different 5-decimal bucket), collab names ("Surf Coffee x ..."), plus some
    broken rows with missing coordinates or names and invisible direction marks.
    """
    rng = np.random.default_rng(seed)

    # Center around Moscow
    CENTER_LAT = 55.751244
    CENTER_LON = 37.618423

    # ~0.00001 deg latitude is roughly 1.1 m
    METRE_DEG = 0.000009

    collabs = ["Garage", "Flacon", "Hlebozavod", "Depo", "Dream"]
    streets = ["Тверская ул.", "ул. Арбат", "Покровка", "Мясницкая ул.", "Пятницкая ул."]

    data = []

    for shop_index in range(num_shops):
        # Shops placed within a ~10km radius (roughly 0.09 degrees)
        lat = CENTER_LAT + rng.uniform(-0.09, 0.09)
        lon = CENTER_LON + rng.uniform(-0.15, 0.15)
        street = rng.choice(streets)
        address = f"Москва, {street}, {rng.integers(1, 60)}"
        name = "Surf Coffee"
        if shop_index == 0:
            name = "Surf Coffee Secret Spot"
        elif rng.random() < 0.2:
            name = f"Surf Coffee x {rng.choice(collabs)}"

        data.append({"latitude": np.round(lat, 6), "longitude": np.round(lon, 6), "org_name": name, "full_address": address})

        copies = rng.choice([0, 1, 2], p=[0.5, 0.3, 0.2])
        for _ in range(copies):
            if rng.random() < 0.5:
                # same bucket, poorer record
                dup_lat, dup_lon = lat, lon
                dup_address = street
            else:
                # 5-30 m away, usually a different bucket
                offset = rng.uniform(5, 30) * METRE_DEG
                dup_lat, dup_lon = lat + offset, lon - offset
                dup_address = f"\u200e{address}\u200f"
            data.append({
                "latitude": np.round(dup_lat, 6),
                "longitude": np.round(dup_lon, 6),
                "org_name": "  Surf   Coffee ",
                "full_address": dup_address,
            })

    # broken rows the normalizer has to drop
    data.append({"latitude": "", "longitude": CENTER_LON, "org_name": "Surf Coffee", "full_address": "Москва"})
    data.append({"latitude": CENTER_LAT, "longitude": "n/a", "org_name": "Surf Coffee", "full_address": "Москва"})
    data.append({"latitude": CENTER_LAT, "longitude": CENTER_LON, "org_name": "   ", "full_address": "Москва"})

    # Save to CSV
    df = pd.DataFrame(data)
    df = df.sample(frac=1.0, random_state=seed).reset_index(drop=True)
    df.to_csv(output_file, index=False)
    print(f"✅ Generated {len(df)} rows for {num_shops} shops and saved to '{output_file}'")

    # Print a quick preview of duplicate density
    print("\nMost repeated names:")
    counts = df['org_name'].value_counts().head(5)
    for name, count in counts.items():
        print(f"  {name!r}: {count} rows")

if __name__ == "__main__":
    generate_mock_points(num_shops=120, seed=7)
