"""Offline, rule-based replies.

Used for the MOCK and HUGGINGFACE modes and whenever an upstream provider
call fails. Topics are matched by keyword in a fixed order; the first match
wins. The last few turns of history are consulted only to pick a more
specific template for follow-up questions.
"""

from __future__ import annotations

import random
import re
from typing import List, Optional, Pattern, Sequence, Tuple

from ecochat.core.memory import ChatTurn


CONTEXT_TURNS = 4

CARBON_TRANSPORT = """Public transport is definitely a game-changer! 🚌 In Nairobi, matatus and buses can really cut down your carbon emissions compared to driving alone.


Benefits you'll see:

• Lower transportation costs
• Reduced traffic stress
• Meeting new people in your community


Have you tried using public transport more often, or are there barriers that make it challenging for you? (We know matatu music isn't for everyone! 🎵)"""

CARBON = """Great question about carbon footprints! 🌱 This is so important in Kenya where climate change affects our daily lives.


Here are the biggest impact areas:

• Energy use - switch to solar or energy-efficient appliances
• Transportation - use matatus, walk, or bike for short trips
• Food choices - eat more local, seasonal produce


Which area feels most doable for you to start with? (No pressure - we're all just trying to save the world one step at a time! 🌍)"""

SOLAR_COST = """I understand the cost concern! 💰 Solar has gotten much more affordable in Kenya.


Affordable options:

• Many companies offer payment plans
• Start small with solar chargers or single panels
• Long-term savings on electricity bills (50-70% reduction)


Would a gradual approach work better for your situation? (Rome wasn't built in a day, and neither is the perfect eco-home! 🏠)"""

SOLAR = """Solar energy is fantastic in Kenya - we have great sunshine year-round! ☀️ Many homes are seeing huge savings on electricity bills.


Why it's great here:

• Consistent sunshine throughout the year
• Installation has become much easier
• Government incentives available
• 50-70% reduction in electricity costs


Are you thinking about it for your home, or maybe starting with something smaller like solar lighting? (Either way, your electricity meter will thank you! 💡)"""

RECYCLING = """Waste management is so important! ♻️ In Kenya, we have growing recycling opportunities.


What you can recycle:

• Plastics - clean containers, bottles, bags
• Glass - bottles and jars
• Paper - newspapers, cardboard, office paper
• Metals - cans and containers


Companies like Petco and local community groups make it easier. But honestly, reducing what we buy first makes the biggest impact.


What kind of waste do you find yourself throwing away most? (Don't worry, we're not judging your take-away containers! 📦)"""

WATER = """Water conservation is crucial in Kenya! 💧 Every drop counts, especially during dry seasons.


Simple conservation tips:

• Fix leaky taps and pipes immediately
• Take shorter showers (aim for 5 minutes)
• Collect rainwater for gardens
• Install water-efficient fixtures


Many people are also using greywater systems for their gardens.


Have you noticed any water waste around your home that might be easy to fix? (Spoiler alert: that dripping tap is definitely plotting against your water bill! 💧)"""

FOOD = """Local, sustainable food makes such a difference! 🥬 Kenya has amazing agricultural diversity.


Benefits of buying local:

• Supports Kenyan farmers directly
• Reduces transport emissions
• Fresher, more nutritious food
• Often more affordable than imported options


Great places to find local produce:

• Farmers markets in your area
• Community-supported agriculture (CSA) programs
• Local organic farms


Do you have a favorite market, or are you interested in maybe growing some of your own herbs? (Warning: homegrown tomatoes may ruin store-bought ones forever! 🍅)"""

TREES = """Trees are amazing for fighting climate change! 🌳 Kenya's doing great work with reforestation initiatives.


Environmental benefits:

• Clean the air and produce oxygen
• Prevent soil erosion
• Provide habitat for wildlife
• Cool down temperatures naturally


Even in small spaces you can make a difference:

• Plant herbs on windowsills
• Grow small trees in containers
• Join community tree-planting events


Do you have space for any plants where you live? (Even a windowsill herb garden counts as joining the green revolution! 🌿)"""

TRANSPORT = """Transportation is a big part of our carbon footprint! 🚌 In Kenya, we have many eco-friendly options.


Sustainable transport options:

• Matatus - shared rides reduce individual emissions
• Boda bodas - efficient for short distances
• Walking - free and healthy!
• Cycling - growing bike culture in cities
• Electric vehicles - becoming more available


Each option has different benefits for cost, convenience, and environmental impact.


How do you usually get around, and would other options work for your routine? (We promise walking to work won't turn you into a fitness influencer... or will it? 🚶‍♀️)"""

GENERIC_TEMPLATES: Tuple[str, ...] = (
    """That's a great question about sustainability! 🌱 Kenya is facing real climate challenges, but there's so much we can do.


Quick wins to get started:

• Use energy-efficient light bulbs
• Turn off electronics when not in use
• Choose public transport for longer trips
• Buy local products when possible


What aspect of sustainable living interests you most - energy, transportation, or maybe waste reduction? (Plot twist: they all save you money too! 💰)""",
    """Climate action is so important right now! 🌍 The good news is that sustainable choices often save money too.


Areas where you can make an impact:

• Renewable energy - especially solar in Kenya
• Water conservation - crucial during dry seasons
• Sustainable transportation options
• Supporting local, eco-friendly businesses


Which of these sounds most exciting to you - or are you the type who wants to tackle them all at once? (We admire the ambition! 🚀)""",
)

# Follow-up cues are matched on word boundaries so "car" does not fire on
# "carbon" from the question itself.
_TRANSPORT_CUE: Pattern[str] = re.compile(r"\btransport|\bcars?\b")
_COST_CUE: Pattern[str] = re.compile(r"\bcost|\bafford|\bexpensive")


def _mentions(text: str, *keywords: str) -> bool:
    return any(keyword in text for keyword in keywords)


class FallbackResponder:
    """Deterministic keyword classifier over the message and recent history.

    ``rng`` is only consulted for messages that match no topic.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def recent_context(self, message: str, history: Sequence[ChatTurn]) -> str:
        recent: List[str] = [turn.content for turn in list(history)[-CONTEXT_TURNS:]]
        recent.append(message)
        return " ".join(recent).lower()

    def respond(self, message: str, history: Sequence[ChatTurn] = ()) -> str:
        text = (message or "").lower()
        recent = self.recent_context(message or "", history)

        if _mentions(text, "carbon", "footprint", "emission"):
            return CARBON_TRANSPORT if _TRANSPORT_CUE.search(recent) else CARBON
        if _mentions(text, "renewable", "solar", "energy"):
            return SOLAR_COST if _COST_CUE.search(recent) else SOLAR
        if _mentions(text, "recycle", "waste", "plastic"):
            return RECYCLING
        if _mentions(text, "water", "conserve", "save"):
            return WATER
        if _mentions(text, "food", "organic", "farming"):
            return FOOD
        if _mentions(text, "tree", "plant", "forest"):
            return TREES
        if _mentions(text, "transport", "matatu", "car", "fuel"):
            return TRANSPORT
        return self.rng.choice(GENERIC_TEMPLATES)
