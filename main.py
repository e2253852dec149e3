#!/usr/bin/env python3
"""
Dotcraft - Entry Point
═══════════════════════════════════════════════════════════════════════════

Uruchamia przykładową sesję panelu składania broni.

Użycie:
    python main.py                        # Składa pierwszą recepturę z katalogu
    python main.py --recipe hammer        # Konkretna receptura
    python main.py --noise                # Dodatkowa kropka - receptura odrzucona
    python main.py --verbose              # Szczegółowy output (logging DEBUG)

Wynik:
    - Wypisuje siatkę i wynik składania na konsolę
    - Zapisuje log zdarzeń do output/crafting_{recipe}.json
"""

import argparse
import logging
import sys

from dotcraft.core.config_loader import ConfigLoader
from dotcraft.core.grid_coord import GridCoord
from dotcraft.crafting.session import CraftingSession
from dotcraft.events.event_logger import EventType


def find_anchor(session: CraftingSession, recipe) -> GridCoord:
    """Pierwsza kotwica (row-major), w której cały kształt mieści się w siatce."""
    for anchor in session.grid.iter_anchors():
        if all(session.grid.is_valid_coord(cell) for cell in recipe.cells_at(anchor)):
            return anchor
    raise ValueError(f"Recipe '{recipe.id}' does not fit on a {session.grid_size}x{session.grid_size} grid")


def main():
    """Główna funkcja."""
    parser = argparse.ArgumentParser(
        description="Dotcraft - dot-grid weapon crafting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--data",
        default="data/",
        help="Folder z plikami YAML (domyślnie: data/)"
    )
    parser.add_argument(
        "--recipe",
        default=None,
        help="ID receptury do złożenia (domyślnie: pierwsza w katalogu)"
    )
    parser.add_argument(
        "--noise",
        action="store_true",
        help="Połóż dodatkową kropkę poza kształtem (test reguły czystości)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Szczegółowy output"
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Nie zapisuj logu do pliku"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Załaduj konfigurację
    loader = ConfigLoader(args.data)
    session = CraftingSession.from_config(loader)

    recipe_id = args.recipe or session.catalog.ids()[0]
    recipe = session.catalog.get(recipe_id)

    print("=" * 60)
    print("DOTCRAFT")
    print("=" * 60)
    print(f"Receptura: {recipe.name} ({recipe.id}), {recipe.size} kropek")
    print(f"Pula: {session.pool_count()}")
    print()

    session.on_crafted(
        lambda r: print(f"⚔️  Nowa broń: {r.name} ({r.weapon.damage_type.name.lower()}, "
                        f"{r.weapon.base_damage:.0f} dmg)")
    )

    # Połóż kształt
    anchor = find_anchor(session, recipe)
    for cell in recipe.cells_at(anchor):
        session.toggle_cell(cell.x, cell.y)

    if args.noise:
        for pos in session.grid.iter_anchors():
            if not session.cell_state(pos.x, pos.y):
                session.toggle_cell(pos.x, pos.y)
                break

    print(session.grid.debug_print())
    print()
    print(f"Pula po ułożeniu: {session.pool_count()}")
    print("-" * 60)

    result = session.confirm()

    if result.crafted:
        print(f"🏆 ZŁOŻONO: {result.recipe_id} @ {result.anchor.as_tuple()}")
    else:
        print(f"↩️  ZWROT: {result.units_returned} kropek")
    print(f"Pula: {session.pool_count()}")

    # Zapisz log
    if not args.no_save:
        output_path = f"output/crafting_{recipe.id}.json"
        session.event_log.save(output_path)
        print()
        print(f"📄 Log zapisany: {output_path}")

    if args.verbose:
        print()
        print("-" * 60)
        print("STATYSTYKI ZDARZEŃ")
        print("-" * 60)
        for event_type in EventType:
            count = len(session.event_log.get_events_by_type(event_type))
            if count > 0:
                print(f"  {event_type.name}: {count}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
