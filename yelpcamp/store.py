"""
Narrow persistence interface used by the route handlers.

Handlers never touch ``db.session`` directly: they go through ``find``,
``find_by_id``, ``create`` and ``save`` so that every database failure
surfaces as a ``PersistenceError``. Each call is one round trip and commits
on its own; nothing here spans more than one call in a transaction.
"""
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from .errors import PersistenceError
from .models import db


def _loader(model, path):
    """Build an eager-load option for a dotted relationship path such as
    ``'comments.author'``."""
    option = None
    current = model
    for name in path.split('.'):
        attr = getattr(current, name)
        option = selectinload(attr) if option is None else option.selectinload(attr)
        current = attr.property.mapper.class_
    return option


def _fail(action, model, exc):
    db.session.rollback()
    current_app.logger.exception(f'{action} on {model.__name__} failed: {exc}')
    return PersistenceError(f'{action} on {model.__name__} failed')


def find(model, **filters):
    """Return every ``model`` row matching ``filters`` (all rows if none)."""
    try:
        stmt = db.select(model).filter_by(**filters).order_by(model.id)
        return db.session.execute(stmt).scalars().all()
    except SQLAlchemyError as e:
        raise _fail('find', model, e) from e


def find_one(model, **filters):
    try:
        stmt = db.select(model).filter_by(**filters).limit(1)
        return db.session.execute(stmt).scalars().first()
    except SQLAlchemyError as e:
        raise _fail('find', model, e) from e


def find_by_id(model, ident, populate=()):
    """
    Load a single row by primary key, or ``None`` if it does not exist.

    ``populate`` names relationships (dotted for nested ones) to resolve in
    the same call, e.g. ``find_by_id(Campground, 3, populate=['comments.author'])``.
    """
    options = [_loader(model, path) for path in populate]
    try:
        return db.session.get(model, ident, options=options)
    except SQLAlchemyError as e:
        raise _fail('find_by_id', model, e) from e


def create(model, fields):
    entity = model(**fields)
    try:
        db.session.add(entity)
        db.session.commit()
    except SQLAlchemyError as e:
        raise _fail('create', model, e) from e
    return entity


def save(entity):
    try:
        db.session.add(entity)
        db.session.commit()
    except SQLAlchemyError as e:
        raise _fail('save', type(entity), e) from e
