from liftsim.models.request import RequestStatus


async def test_create_request(async_client, controller, request_stream):
    response = await async_client.post(
        "/api/requests", json={"source_floor": 2, "destination_floor": 6}
    )

    assert response.status_code == 202
    data = response.json()
    assert data["status"] == "queued"
    assert data["request"]["source_floor"] == 2
    assert data["request"]["status"] == RequestStatus.PENDING.value

    queued = await request_stream.read()
    assert [request.id for request in queued] == [data["request"]["id"]]


async def test_create_request_out_of_range(async_client, request_stream):
    response = await async_client.post(
        "/api/requests", json={"source_floor": 0, "destination_floor": 11}
    )

    assert response.status_code == 422
    assert len(request_stream) == 0


async def test_create_request_missing_field(async_client):
    response = await async_client.post("/api/requests", json={"source_floor": 3})

    assert response.status_code == 422


async def test_get_elevators(async_client, controller):
    response = await async_client.get("/api/elevators")

    assert response.status_code == 200
    elevators = response.json()["elevators"]
    assert [elevator["id"] for elevator in elevators] == [1, 2]
    assert elevators[0]["status"] == "IDLE"


async def test_get_requests(async_client, controller):
    await async_client.post("/api/requests", json={"source_floor": 4, "destination_floor": 1})
    await controller.step()

    response = await async_client.get("/api/requests")

    assert response.status_code == 200
    data = response.json()
    assert len(data["requests"]) == 1
    assert data["requests"][0]["status"] == RequestStatus.ASSIGNED.value
    assert data["has_pending"] is False
