"""
Request endpoints.

Create connection and session requests, move them through their
lifecycle, and list pending ones.  The acting actor id is passed
explicitly; authentication happens upstream.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies import get_request_service
from app.models.enums import ActorRole, RequestKind, RequestStatus
from app.models.request import Request
from app.schemas.actor import ActorRef
from app.schemas.request import (ConnectionRequestCreate, RequestResponse, SessionRequestCreate,
                                 TransitionResponse, )
from app.services.request_service import RequestService

router = APIRouter()


def _to_response(request: Request) -> RequestResponse:
    response = RequestResponse.model_validate(request)
    response.session = request.session_payload
    return response


def _transition_result(request_id: int, done: bool, new_status: RequestStatus) -> TransitionResponse:
    if not done:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                            detail=f"Request {request_id} cannot be moved to {new_status.value}", )
    return TransitionResponse(request_id=request_id, status=new_status)


@router.post("/connections", summary="Send a connection request.", response_model=RequestResponse,
             status_code=status.HTTP_201_CREATED, )
def create_connection_request(data: ConnectionRequestCreate,
                              service: RequestService = Depends(get_request_service), ):
    return _to_response(service.create_connection_request(data))


@router.post("/sessions", summary="Propose a session.", response_model=RequestResponse,
             status_code=status.HTTP_201_CREATED, )
def create_session_request(data: SessionRequestCreate, service: RequestService = Depends(get_request_service), ):
    return _to_response(service.create_session_request(data))


@router.get("/pending/received", summary="Pending requests addressed to an actor.",
            response_model=list[RequestResponse], )
def list_pending_received(role: ActorRole, actor_id: int = Query(..., gt=0), kind: Optional[RequestKind] = None,
                          service: RequestService = Depends(get_request_service), ):
    requests = service.list_pending_for_receiver(ActorRef(role=role, id=actor_id), kind)
    return [_to_response(r) for r in requests]


@router.get("/pending/sent", summary="Pending requests sent by an actor.", response_model=list[RequestResponse], )
def list_pending_sent(role: ActorRole, actor_id: int = Query(..., gt=0), kind: Optional[RequestKind] = None,
                      service: RequestService = Depends(get_request_service), ):
    requests = service.list_pending_sent_by(ActorRef(role=role, id=actor_id), kind)
    return [_to_response(r) for r in requests]


@router.get("/connections", summary="Ids of the actors linked to an actor.", response_model=list[int], )
def list_connections(role: ActorRole, actor_id: int = Query(..., gt=0),
                     service: RequestService = Depends(get_request_service), ):
    return service.list_connections(ActorRef(role=role, id=actor_id))


@router.get("/{request_id}", summary="Get a request.", response_model=RequestResponse, )
def get_request(request_id: int, service: RequestService = Depends(get_request_service), ):
    return _to_response(service.get_request(request_id))


@router.post("/{request_id}/accept", summary="Accept a pending request.", response_model=TransitionResponse, )
def accept_request(request_id: int, receiver_id: int = Query(...),
                   service: RequestService = Depends(get_request_service), ):
    return _transition_result(request_id, service.accept(request_id, receiver_id), RequestStatus.ACCEPTED)


@router.post("/{request_id}/decline", summary="Decline a pending request.", response_model=TransitionResponse, )
def decline_request(request_id: int, receiver_id: int = Query(...),
                    service: RequestService = Depends(get_request_service), ):
    return _transition_result(request_id, service.decline(request_id, receiver_id), RequestStatus.REJECTED)


@router.post("/{request_id}/cancel", summary="Cancel a pending request.", response_model=TransitionResponse, )
def cancel_request(request_id: int, sender_id: int = Query(...),
                   service: RequestService = Depends(get_request_service), ):
    return _transition_result(request_id, service.cancel(request_id, sender_id), RequestStatus.CANCELLED)
