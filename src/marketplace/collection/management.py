"""Collection management (administrators): commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.category.management import require_category
from marketplace.collection.collection import Collection, slugify
from marketplace.domain import marketplace


@marketplace.command(part_of="Collection")
class CreateCollection:
    name = String(required=True, max_length=150)
    slug = String(max_length=160)
    description = Text()
    image_url = String(max_length=500)
    category_id = Identifier()
    season = String(max_length=20)
    is_featured = Boolean(default=False)
    display_order = Integer(default=0)


@marketplace.command(part_of="Collection")
class UpdateCollection:
    collection_id = Identifier(required=True)
    name = String(max_length=150)
    description = Text()
    image_url = String(max_length=500)
    category_id = Identifier()
    season = String(max_length=20)
    is_featured = Boolean()
    display_order = Integer()
    is_active = Boolean()


@marketplace.command(part_of="Collection")
class DeactivateCollection:
    collection_id = Identifier(required=True)


@marketplace.command_handler(part_of=Collection)
class ManageCollectionHandler:
    @handle(CreateCollection)
    def create_collection(self, command):
        repo = current_domain.repository_for(Collection)
        slug = slugify(command.slug or command.name)
        if repo._dao.query.filter(slug=slug).all().first is not None:
            raise ValidationError({"slug": [f"Collection slug {slug} is already taken"]})
        require_category(command.category_id)

        collection = Collection.create(
            name=command.name,
            slug=slug,
            description=command.description,
            image_url=command.image_url,
            category_id=command.category_id,
            season=command.season,
            is_featured=command.is_featured,
            display_order=command.display_order,
        )
        repo.add(collection)
        return str(collection.id)

    @handle(UpdateCollection)
    def update_collection(self, command):
        require_category(command.category_id)
        repo = current_domain.repository_for(Collection)
        collection = repo.get(command.collection_id)
        collection.update_details(
            name=command.name,
            description=command.description,
            image_url=command.image_url,
            category_id=command.category_id,
            season=command.season,
            is_featured=command.is_featured,
            display_order=command.display_order,
            is_active=command.is_active,
        )
        repo.add(collection)

    @handle(DeactivateCollection)
    def deactivate_collection(self, command):
        repo = current_domain.repository_for(Collection)
        collection = repo.get(command.collection_id)
        collection.deactivate()
        repo.add(collection)
