from fastapi import APIRouter, Depends, HTTPException

from herbaverse.dependencies import get_knowledge_base
from herbaverse.services.knowledge_base import KnowledgeBase

router = APIRouter(prefix="/plants", tags=["plants"])


@router.get("")
async def list_plants(knowledge_base: KnowledgeBase = Depends(get_knowledge_base)):
    return {"plants": knowledge_base.summaries()}


@router.get("/{plant_id}")
async def get_plant(plant_id: str, knowledge_base: KnowledgeBase = Depends(get_knowledge_base)):
    plant = knowledge_base.get(plant_id)
    if not plant:
        raise HTTPException(status_code=404, detail=f"Plant not found: {plant_id}")
    return plant.to_dict()
