"""Export JSON schemas for the stored itinerary collection and the booking form.

The collection schema describes the blob written under the itineraries key, so
other readers of the store (backups, migrations) can validate it offline.
"""

import json
from pathlib import Path

from tripcore.models import BookingForm, itinerary_collection


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    # Export stored collection schema
    collection_schema = itinerary_collection.json_schema()
    collection_path = schemas_dir / "ItineraryCollection.schema.json"
    with open(collection_path, "w") as f:
        json.dump(collection_schema, f, indent=2)
    print(f"Exported itinerary collection schema to {collection_path}")

    # Export BookingForm schema
    form_schema = BookingForm.model_json_schema()
    form_path = schemas_dir / "BookingForm.schema.json"
    with open(form_path, "w") as f:
        json.dump(form_schema, f, indent=2)
    print(f"Exported BookingForm schema to {form_path}")


if __name__ == "__main__":
    main()
