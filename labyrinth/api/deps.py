"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from labyrinth.services.labyrinth_service import LabyrinthService


def get_labyrinth_service(request: Request) -> LabyrinthService:
    """Get the labyrinth service owned by the running application."""
    service = getattr(request.app.state, "labyrinth", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Labyrinth service not initialized",
        )
    return service


# Type alias for cleaner route signatures
Labyrinth = Annotated[LabyrinthService, Depends(get_labyrinth_service)]
