"""CRUD routes for logs, alarms, emergency contacts, safety plans and wellness plans.

Handlers stay thin: parse the body into a model, call the store, dump the
result. ``BadRequest`` from ``parse_body`` is turned into a 400 by the
server's error middleware.
"""

from __future__ import annotations

from aiohttp import web

from src.api.context import STORES, BadRequest, dump, json_error, parse_body
from src.records.models import (
    AlarmCreate,
    AlarmFields,
    ContactCreate,
    ContactFields,
    LogCreate,
    LogFields,
    SafetyPlanCreate,
    SafetyPlanFields,
    WellnessPlanUpsert,
)


# -- Logs ----------------------------------------------------------------------


async def list_logs(request: web.Request) -> web.Response:
    logs = await request.app[STORES].logs.list_for_user(request.match_info["user_id"])
    if not logs:
        return json_error("No logs found for this user", 404)
    return web.json_response([dump(log) for log in logs])


async def create_log(request: web.Request) -> web.Response:
    entry = await parse_body(request, LogCreate)
    log = await request.app[STORES].logs.add(entry)
    return web.json_response(dump(log))


async def update_log(request: web.Request) -> web.Response:
    fields = await parse_body(request, LogFields)
    if not fields.model_fields_set:
        raise BadRequest("No fields to update")
    log = await request.app[STORES].logs.update(request.match_info["log_id"], fields)
    if log is None:
        return json_error("Log not found", 404)
    return web.json_response(dump(log))


async def delete_log(request: web.Request) -> web.Response:
    await request.app[STORES].logs.delete(request.match_info["log_id"])
    return web.json_response({"success": True})


# -- Alarms --------------------------------------------------------------------


async def list_alarms(request: web.Request) -> web.Response:
    alarms = await request.app[STORES].alarms.list_for_user(request.match_info["user_id"])
    return web.json_response([dump(alarm) for alarm in alarms])


async def create_alarm(request: web.Request) -> web.Response:
    alarm = await request.app[STORES].alarms.add(await parse_body(request, AlarmCreate))
    return web.json_response(dump(alarm))


async def update_alarm(request: web.Request) -> web.Response:
    fields = await parse_body(request, AlarmFields)
    alarm = await request.app[STORES].alarms.update(request.match_info["id"], fields)
    if alarm is None:
        return json_error("Alarm not found", 404)
    return web.json_response(dump(alarm))


async def delete_alarm(request: web.Request) -> web.Response:
    await request.app[STORES].alarms.delete(request.match_info["id"])
    return web.json_response({"message": "Alarm deleted"})


# -- Emergency contacts --------------------------------------------------------


async def list_contacts(request: web.Request) -> web.Response:
    contacts = await request.app[STORES].contacts.list_for_user(request.match_info["user_id"])
    return web.json_response([dump(contact) for contact in contacts])


async def create_contact(request: web.Request) -> web.Response:
    contact = await request.app[STORES].contacts.add(await parse_body(request, ContactCreate))
    return web.json_response(dump(contact))


async def update_contact(request: web.Request) -> web.Response:
    fields = await parse_body(request, ContactFields)
    contact = await request.app[STORES].contacts.update(request.match_info["id"], fields)
    if contact is None:
        return json_error("Contact not found", 404)
    return web.json_response(dump(contact))


async def delete_contact(request: web.Request) -> web.Response:
    await request.app[STORES].contacts.delete(request.match_info["id"])
    return web.json_response({"message": "Contact deleted"})


# -- Safety plans --------------------------------------------------------------


async def list_safety_plans(request: web.Request) -> web.Response:
    plans = await request.app[STORES].safety_plans.list_for_user(request.match_info["user_id"])
    return web.json_response([dump(plan) for plan in plans])


async def create_safety_plan(request: web.Request) -> web.Response:
    plan = await request.app[STORES].safety_plans.add(
        await parse_body(request, SafetyPlanCreate)
    )
    return web.json_response(dump(plan), status=201)


async def update_safety_plan(request: web.Request) -> web.Response:
    fields = await parse_body(request, SafetyPlanFields)
    plan = await request.app[STORES].safety_plans.update(request.match_info["id"], fields)
    if plan is None:
        return json_error("Safety plan not found", 404)
    return web.json_response(dump(plan))


async def delete_safety_plan(request: web.Request) -> web.Response:
    await request.app[STORES].safety_plans.delete(request.match_info["id"])
    return web.json_response({"message": "Safety plan deleted"})


# -- Wellness plans ------------------------------------------------------------


async def list_wellness_plans(request: web.Request) -> web.Response:
    plans = await request.app[STORES].wellness_plans.list_for_user(
        request.match_info["user_id"]
    )
    return web.json_response([dump(plan) for plan in plans])


async def upsert_wellness_plan(request: web.Request) -> web.Response:
    body = await parse_body(request, WellnessPlanUpsert)
    plan = await request.app[STORES].wellness_plans.upsert(body.user_id, body.items)
    return web.json_response(dump(plan))


async def remove_wellness_item(request: web.Request) -> web.Response:
    user_id = request.query.get("user_id", "")
    label = request.query.get("label", "")
    if not user_id or not label:
        raise BadRequest("user_id and label query parameters are required")

    plan = await request.app[STORES].wellness_plans.remove_item(user_id, label)
    if plan is None:
        return json_error("Wellness plan not found", 404)
    return web.json_response(dump(plan))


def add_record_routes(app: web.Application) -> None:
    """Register every CRUD route on *app*."""
    app.router.add_get("/logs/user/{user_id}", list_logs)
    app.router.add_post("/logs", create_log)
    app.router.add_put("/logs/{log_id}", update_log)
    app.router.add_delete("/logs/{log_id}", delete_log)

    app.router.add_get("/alarms/user/{user_id}", list_alarms)
    app.router.add_post("/alarms", create_alarm)
    app.router.add_put("/alarms/{id}", update_alarm)
    app.router.add_delete("/alarms/{id}", delete_alarm)

    app.router.add_get("/contacts/user/{user_id}", list_contacts)
    app.router.add_post("/contacts", create_contact)
    app.router.add_put("/contacts/{id}", update_contact)
    app.router.add_delete("/contacts/{id}", delete_contact)

    app.router.add_get("/safety-plans/user/{user_id}", list_safety_plans)
    app.router.add_post("/safety-plans", create_safety_plan)
    app.router.add_put("/safety-plans/{id}", update_safety_plan)
    app.router.add_delete("/safety-plans/{id}", delete_safety_plan)

    app.router.add_get("/wellness-plan/user/{user_id}", list_wellness_plans)
    app.router.add_post("/wellness-plan", upsert_wellness_plan)
    app.router.add_delete("/wellness-plan/item", remove_wellness_item)
