from typing import List

from fastapi import APIRouter, Depends

from quizdeck.schemas.req.module import QuestionCreateDTO
from quizdeck.schemas.res.module import MessageResponse, ModuleCreatedResponse, ModuleListResponse
from quizdeck.services.module import ModuleService

module_router = APIRouter()


@module_router.post("/admin/create-module", status_code=201, response_model=ModuleCreatedResponse)
async def create_module(
    questions: List[QuestionCreateDTO],
    module_service: ModuleService = Depends(ModuleService),
):
    """Upload a module, replacing any questions it already had"""
    count = await module_service.create_module(questions)
    module_name = questions[0].moduleName
    return ModuleCreatedResponse(message=f"Module '{module_name}' saved successfully.", count=count)


# :path so that names containing an encoded "/" still match
@module_router.delete("/admin/module/{moduleName:path}", response_model=MessageResponse)
async def delete_module(moduleName: str, module_service: ModuleService = Depends(ModuleService)):
    """Delete a module together with its scores and reports"""
    await module_service.delete_module(moduleName)
    return MessageResponse(message=f"Module '{moduleName}' and its associated data deleted successfully.")


@module_router.get("/modules", response_model=ModuleListResponse)
async def get_modules(module_service: ModuleService = Depends(ModuleService)):
    return ModuleListResponse(modules=await module_service.list_modules())
