"""
Plant Knowledge Base
Static, curated medicinal plant records used for prompting and confidence scoring.
Loaded once at import; changing the plant list requires a redeploy.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlantRecord:
    """One medicinal plant and the keywords that count as evidence for it"""
    id: str
    name: str
    scientific_name: str
    conditions: Tuple[str, ...]
    confidence_keywords: Tuple[str, ...]
    uses: Tuple[str, ...] = ()
    description: str = ""
    # Catalog display fields
    habitat: str = ""
    cultivation: str = ""
    medicinal_parts: Tuple[str, ...] = ()
    preparation_methods: Tuple[str, ...] = ()
    dosage: str = ""
    precautions: Tuple[str, ...] = ()

    def to_summary(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "scientificName": self.scientific_name,
            "uses": list(self.uses),
            "conditions": list(self.conditions),
        }

    def to_dict(self) -> Dict:
        data = asdict(self)
        return {
            "id": data["id"],
            "name": data["name"],
            "scientificName": data["scientific_name"],
            "description": data["description"],
            "conditions": list(data["conditions"]),
            "confidenceKeywords": list(data["confidence_keywords"]),
            "uses": list(data["uses"]),
            "habitat": data["habitat"],
            "cultivation": data["cultivation"],
            "medicinalParts": list(data["medicinal_parts"]),
            "preparationMethods": list(data["preparation_methods"]),
            "dosage": data["dosage"],
            "precautions": list(data["precautions"]),
        }


PLANT_DATABASE: Tuple[PlantRecord, ...] = (
    PlantRecord(
        id="aloe-vera",
        name="Aloe Vera",
        scientific_name="Aloe barbadensis miller",
        conditions=("burns", "skin problems", "digestive issues", "inflammation", "wound healing"),
        confidence_keywords=("burn", "skin", "cut", "wound", "heal", "soothing", "gel"),
        uses=("Topical gel for burns", "Digestive health", "Anti-inflammatory"),
        description="Succulent plant with gel-filled leaves known for skin healing properties",
        habitat="Native to Arabian Peninsula, now cultivated worldwide in tropical and subtropical regions",
        cultivation="Requires well-draining soil, bright indirect sunlight, and minimal watering. "
                    "Drought-tolerant and easy to grow indoors.",
        medicinal_parts=("Leaves", "Gel"),
        preparation_methods=("Fresh Gel", "Juice", "Powder", "Extract"),
        dosage="External: Apply gel directly to skin. Internal: 1-2 tablespoons of juice daily "
               "(consult healthcare provider)",
        precautions=(
            "May cause allergic reactions in some individuals",
            "Internal use should be limited",
            "Not recommended during pregnancy",
        ),
    ),
    PlantRecord(
        id="turmeric",
        name="Turmeric",
        scientific_name="Curcuma longa",
        conditions=("inflammation", "arthritis", "digestive problems", "infection", "pain"),
        confidence_keywords=("inflammation", "joint", "pain", "arthritis", "turmeric", "golden", "spice"),
        uses=("Anti-inflammatory", "Joint pain relief", "Digestive aid"),
        description="Golden spice with powerful anti-inflammatory and antioxidant properties",
        habitat="Native to Southeast Asia, primarily cultivated in India, Thailand, and other tropical regions",
        cultivation="Requires warm, humid climate with well-drained soil. Grows best in temperatures "
                    "between 20-30°C with adequate rainfall.",
        medicinal_parts=("Rhizomes", "Roots"),
        preparation_methods=("Powder", "Fresh Paste", "Extract", "Oil", "Tea"),
        dosage="1-3 grams daily as powder, or 1-2 teaspoons fresh paste. "
               "For therapeutic use, consult healthcare provider.",
        precautions=(
            "May increase bleeding risk",
            "Can interfere with certain medications",
            "High doses may cause stomach upset",
        ),
    ),
    PlantRecord(
        id="neem",
        name="Neem",
        scientific_name="Azadirachta indica",
        conditions=("skin infections", "bacterial infections", "fungal problems", "diabetes", "immune system"),
        confidence_keywords=("infection", "bacteria", "fungal", "skin", "diabetes", "blood sugar", "immune"),
        uses=("Antibacterial", "Antifungal", "Blood sugar management"),
        description='Medicinal tree known as "village pharmacy" for its versatile healing properties',
        habitat="Native to Indian subcontinent, now found throughout tropical and semi-tropical regions",
        cultivation="Highly adaptable tree that grows in various soil types. "
                    "Drought-resistant and requires minimal care once established.",
        medicinal_parts=("Leaves", "Bark", "Seeds", "Oil"),
        preparation_methods=("Leaf Powder", "Oil", "Extract", "Fresh Leaves", "Bark Decoction"),
        dosage="Leaves: 2-4 grams powder daily. Oil: External use only. "
               "Consult healthcare provider for internal use.",
        precautions=(
            "Not recommended during pregnancy",
            "May lower blood sugar",
            "Can be toxic in large quantities",
        ),
    ),
)


class KnowledgeBase:
    """
    Read-only lookup over a fixed set of plants.

    Pass an alternate list of records to substitute a different knowledge base
    (e.g. in tests). Duplicate ids and plants without keywords are rejected.
    """

    def __init__(self, plants: Iterable[PlantRecord] = PLANT_DATABASE):
        self._plants: Tuple[PlantRecord, ...] = tuple(plants)
        self._by_id: Dict[str, PlantRecord] = {}
        self._by_name: Dict[str, PlantRecord] = {}

        for plant in self._plants:
            if plant.id in self._by_id:
                raise ValueError(f"Duplicate plant id in knowledge base: {plant.id}")
            if not plant.confidence_keywords:
                raise ValueError(f"Plant {plant.id} has no confidence keywords")
            self._by_id[plant.id] = plant
            # First plant wins on a shared display name
            self._by_name.setdefault(plant.name, plant)

        logger.info(f"✓ Knowledge base loaded with {len(self._plants)} plants")

    def __len__(self) -> int:
        return len(self._plants)

    def __iter__(self):
        return iter(self._plants)

    def get(self, plant_id: str) -> Optional[PlantRecord]:
        return self._by_id.get(plant_id)

    def resolve(self, plant_id: Optional[str] = None, plant_name: Optional[str] = None) -> Optional[PlantRecord]:
        """Exact id match first, then exact display-name match"""
        if plant_id and plant_id in self._by_id:
            return self._by_id[plant_id]
        if plant_name and plant_name in self._by_name:
            return self._by_name[plant_name]
        return None

    def summaries(self) -> List[Dict]:
        return [plant.to_summary() for plant in self._plants]


def generate_plant_prompt_section(knowledge_base: KnowledgeBase) -> str:
    """One line per plant: ``Name (Scientific name): condition, condition``"""
    return "\n".join(
        f"{plant.name} ({plant.scientific_name}): {', '.join(plant.conditions)}"
        for plant in knowledge_base
    )


default_knowledge_base = KnowledgeBase()
