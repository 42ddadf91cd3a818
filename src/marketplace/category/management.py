"""Category management (administrators): commands and handler.

Products and collections reference categories by id; their handlers call
``require_category`` so an unknown or inactive id is rejected up front.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.category.category import Category
from marketplace.collection.collection import slugify
from marketplace.domain import marketplace


def require_category(category_id) -> Category | None:
    """The active category ``category_id`` names; None when no id is given."""
    if not category_id:
        return None
    try:
        category = current_domain.repository_for(Category).get(str(category_id))
    except ObjectNotFoundError:
        raise ValidationError({"category_id": [f"Category {category_id} does not exist"]})
    if not category.is_active:
        raise ValidationError({"category_id": [f"Category {category.name} is inactive"]})
    return category


def _ensure_not_beneath_itself(category: Category, parent_id) -> None:
    """Walk up from the proposed parent; reaching ``category`` means a cycle."""
    repo = current_domain.repository_for(Category)
    seen = set()
    current = str(parent_id)
    while current and current not in seen:
        if current == str(category.id):
            raise ValidationError({"parent_id": ["A category cannot be moved beneath its own subcategory"]})
        seen.add(current)
        current = repo.get(current).parent_id
        current = str(current) if current else None


@marketplace.command(part_of="Category")
class CreateCategory:
    name = String(required=True, max_length=100)
    slug = String(max_length=120)
    description = Text()
    image_url = String(max_length=500)
    parent_id = Identifier()
    display_order = Integer(default=0)
    is_active = Boolean(default=True)


@marketplace.command(part_of="Category")
class UpdateCategory:
    category_id = Identifier(required=True)
    name = String(max_length=100)
    description = Text()
    image_url = String(max_length=500)
    parent_id = Identifier()
    make_top_level = Boolean(default=False)
    display_order = Integer()
    is_active = Boolean()


@marketplace.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        slug = slugify(command.slug or command.name)
        if repo._dao.query.filter(slug=slug).all().first is not None:
            raise ValidationError({"slug": [f"Category slug {slug} is already taken"]})
        require_category(command.parent_id)

        category = Category.create(
            name=command.name,
            slug=slug,
            parent_id=command.parent_id,
            description=command.description,
            image_url=command.image_url,
            display_order=command.display_order,
            is_active=command.is_active,
        )
        repo.add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        if command.make_top_level:
            category.move_to_top_level()
        elif command.parent_id:
            require_category(command.parent_id)
            _ensure_not_beneath_itself(category, command.parent_id)

        category.update_details(
            name=command.name,
            description=command.description,
            image_url=command.image_url,
            parent_id=None if command.make_top_level else command.parent_id,
            display_order=command.display_order,
            is_active=command.is_active,
        )
        repo.add(category)
