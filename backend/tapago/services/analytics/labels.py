"""
Display labels, icons and colors for workouts.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from tapago.services.analytics.snapshots import TypeSnapshot, WorkoutSnapshot

FALLBACK_TYPE_LABEL = "Outro"
UNKNOWN_TYPE_LABEL = "Desconhecido"
NO_TYPE_LABEL = "Nenhum"

FALLBACK_ICON = "⚡"
FALLBACK_COLOR = "hsl(220 9% 46%)"

CALENDAR_ICON = "📅"
PRIMARY_COLOR = "hsl(var(--primary))"

WEEKDAY_NAMES = ["Segunda", "Terça", "Quarta", "Quinta", "Sexta", "Sábado", "Domingo"]
MONTH_NAMES = [
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
]


@dataclass(frozen=True)
class TypeStyle:
    name: str
    icon: str
    color: str


class TypeResolver:
    """Resolves a workout's display label against the user's type descriptors."""
    
    def __init__(self, types: Sequence[TypeSnapshot]):
        self._by_id: Dict[str, TypeSnapshot] = {t.id: t for t in types}
        self._by_name: Dict[str, TypeSnapshot] = {}
        for workout_type in types:
            self._by_name.setdefault(workout_type.name, workout_type)
    
    def label(self, workout: WorkoutSnapshot, fallback: str = UNKNOWN_TYPE_LABEL) -> str:
        if workout.custom_type:
            return workout.custom_type
        descriptor = self._by_id.get(workout.type_id) if workout.type_id else None
        return descriptor.name if descriptor else fallback
    
    def style_for_label(self, label: str) -> TypeStyle:
        descriptor: Optional[TypeSnapshot] = self._by_name.get(label)
        if descriptor is None:
            return TypeStyle(name=label, icon=FALLBACK_ICON, color=FALLBACK_COLOR)
        return TypeStyle(name=label, icon=descriptor.icon, color=descriptor.color)
    
    def style(self, workout: WorkoutSnapshot) -> TypeStyle:
        """Label plus the icon/color of the descriptor the workout points at."""
        if workout.custom_type:
            return TypeStyle(name=workout.custom_type, icon=FALLBACK_ICON, color=FALLBACK_COLOR)
        descriptor = self._by_id.get(workout.type_id) if workout.type_id else None
        if descriptor is None:
            return TypeStyle(name="Treino", icon=FALLBACK_ICON, color=FALLBACK_COLOR)
        return TypeStyle(name=descriptor.name, icon=descriptor.icon, color=descriptor.color)
