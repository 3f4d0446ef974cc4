# benigna-api/benigna/services/categories.py
from benigna.core.errors import NotFoundError, ValidationError
from benigna.db.repository import Repository
from benigna.models.category import CategoryCreate, CategoryInDB, Subcategory

DEFAULT_CATEGORIES = [
    ("Roupas", "👕", ["Adulto", "Infantil", "Calçados", "Agasalhos"]),
    ("Alimentos", "🍎", ["Não perecíveis", "Cestas básicas"]),
    ("Brinquedos", "🧸", ["Pelúcias", "Jogos", "Educativos"]),
    ("Livros", "📚", ["Didáticos", "Literatura", "Infantis"]),
    ("Móveis", "🪑", ["Casa", "Escritório"]),
    ("Eletrônicos", "💻", ["Computadores", "Celulares", "Eletrodomésticos"]),
    ("Higiene", "🧼", ["Higiene pessoal", "Limpeza"]),
]


def add_category(repo: Repository, payload: CategoryCreate) -> CategoryInDB:
    if not payload.name.strip() or not payload.icon.strip():
        raise ValidationError("Por favor, preencha o nome e o ícone da categoria.")
    category = CategoryInDB(name=payload.name.strip(), icon=payload.icon.strip())
    return repo.save_category(category)


def add_subcategory(repo: Repository, category_id: str, name: str) -> Subcategory:
    if not name.strip() or not category_id:
        raise ValidationError("Por favor, preencha o nome e selecione a categoria.")
    category = repo.get_category(category_id)
    if category is None:
        raise NotFoundError("Categoria não encontrada")
    subcategory = category.add_subcategory(name.strip())
    repo.save_category(category)
    return subcategory


def delete_category(repo: Repository, category_id: str) -> None:
    # subcategories live inside the category record and go with it
    if not repo.delete_category(category_id):
        raise NotFoundError("Categoria não encontrada")
