from flask import Blueprint, flash, redirect, render_template, request, url_for

from . import store
from .errors import NotFound, PersistenceError
from .models import Campground

campgrounds_bp = Blueprint('campgrounds', __name__, url_prefix='/campgrounds')


def load_campground(campground_id, populate=()):
    """Fetch a campground or raise ``NotFound``; ids that are not integers
    never match a row."""
    try:
        ident = int(campground_id)
    except (TypeError, ValueError):
        raise NotFound('Campground', campground_id) from None
    campground = store.find_by_id(Campground, ident, populate=populate)
    if campground is None:
        raise NotFound('Campground', campground_id)
    return campground


@campgrounds_bp.route('', methods=['GET'])
def index():
    try:
        campgrounds = store.find(Campground)
    except PersistenceError:
        flash('Campgrounds could not be loaded.', 'error')
        return render_template('campgrounds/index.html', campgrounds=[]), 500
    return render_template('campgrounds/index.html', campgrounds=campgrounds)


@campgrounds_bp.route('', methods=['POST'])
def create():
    # No validation here: the store's NOT NULL constraints are the only check
    fields = {
        'name': request.form.get('name'),
        'image': request.form.get('image'),
        'description': request.form.get('description'),
    }
    try:
        store.create(Campground, fields)
    except PersistenceError:
        flash('The campground could not be saved.', 'error')
        return redirect(url_for('campgrounds.new'))
    return redirect(url_for('campgrounds.index'))


@campgrounds_bp.route('/new')
def new():
    return render_template('campgrounds/new.html')


@campgrounds_bp.route('/<int:campground_id>')
def show(campground_id):
    campground = load_campground(campground_id, populate=['comments.author'])
    return render_template('campgrounds/show.html', campground=campground)
