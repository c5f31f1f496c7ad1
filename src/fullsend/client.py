"""
client.py

pygame presentation layer: turns raw input into intents, draws frame
snapshots and plays synthesized cue sounds. Drawing and audio failures are
logged and never stop the simulation.
"""

import math
import random
import webbrowser
from array import array
from typing import Callable, Dict, List, Optional, Tuple

import pygame

from .config import GameConfig
from .data_models import FLYING_OBJECTS, Craft, Cue, Intent, SessionMode
from .effects import random_hue_color
from .logger import get_logger
from .session import FrameSnapshot, GameSession
from .share import share_url

log = get_logger("client")

WHITE = (255, 255, 255)
RED = (255, 0, 0)

MOCK_LEADERS = [
    ("@Fromoon888", 2305),
    ("@BecsterCrypto", 1375),
    ("@KrisCustoms_", 1140),
]

POWER_UP_COLORS = {
    "double": (255, 255, 0),
    "slow": (0, 255, 0),
    "shield": (0, 255, 255),
    "blast": (255, 0, 0),
}

# cue -> (start Hz, end Hz, seconds, waveform)
CUE_TONES = {
    Cue.LAUNCH: (200, 400, 0.2, "square"),
    Cue.COIN: (800, 1000, 0.1, "sine"),
    Cue.PIPE_PASS: (300, 350, 0.15, "square"),
    Cue.CRASH: (200, 150, 0.2, "sine"),
    Cue.FULL_SEND: (500, 600, 0.3, "sawtooth"),
    Cue.POWER_UP: (600, 800, 0.2, "sine"),
    Cue.HEART: (700, 900, 0.15, "triangle"),
    Cue.VICTORY: (1000, 1200, 0.5, "sine"),
}


# ----------------- Layout (shared by drawing and hit testing) -----------------

class ScreenLayout:
    OBJECT_SIZE = 50
    OBJECT_SPACING = 20
    BUTTON_WIDTH = 220
    BUTTON_HEIGHT = 50

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

    def object_areas(self) -> List[pygame.Rect]:
        count = len(FLYING_OBJECTS)
        total = count * self.OBJECT_SIZE + (count - 1) * self.OBJECT_SPACING
        start_x = self.width / 2 - total / 2
        y = self.height / 2 - 120
        return [
            pygame.Rect(int(start_x + i * (self.OBJECT_SIZE + self.OBJECT_SPACING)), int(y),
                        self.OBJECT_SIZE, self.OBJECT_SIZE)
            for i in range(count)
        ]

    def _button(self, y: float) -> pygame.Rect:
        return pygame.Rect(int(self.width / 2 - self.BUTTON_WIDTH / 2), int(y),
                           self.BUTTON_WIDTH, self.BUTTON_HEIGHT)

    def play_again_button(self) -> pygame.Rect:
        return self._button(self.height / 2 + 80)

    def share_button(self) -> pygame.Rect:
        return self._button(self.height / 2 + 150)


def intent_for_event(event: pygame.event.Event, mode: SessionMode,
                     layout: ScreenLayout) -> Optional[Intent]:
    """Maps one raw pygame event to an intent for the current mode."""
    if event.type == pygame.KEYDOWN:
        if event.key != pygame.K_SPACE:
            return None
        if mode is SessionMode.INTRO:
            return Intent.select_default()
        if mode is SessionMode.PLAYING:
            return Intent.flap()
        return Intent.restart()

    if event.type == pygame.MOUSEBUTTONDOWN:
        pos = event.pos
    elif event.type == pygame.FINGERDOWN:
        pos = (event.x * layout.width, event.y * layout.height)
    else:
        return None

    if mode is SessionMode.INTRO:
        for i, area in enumerate(layout.object_areas()):
            if area.collidepoint(pos):
                return Intent.select(i)
        return None
    if mode is SessionMode.PLAYING:
        return Intent.flap()
    if layout.play_again_button().collidepoint(pos):
        return Intent.restart()
    if layout.share_button().collidepoint(pos):
        return Intent.share()
    return None


# ----------------- Audio -----------------

def synthesize_tone(start_hz: float, end_hz: float, seconds: float, waveform: str,
                    sample_rate: int, channels: int, volume: float = 0.3) -> array:
    """Signed 16-bit samples sweeping linearly from start_hz to end_hz."""
    count = int(sample_rate * seconds)
    samples = array("h")
    phase = 0.0
    for i in range(count):
        freq = start_hz + (end_hz - start_hz) * i / max(count, 1)
        phase = (phase + freq / sample_rate) % 1.0
        if waveform == "sine":
            value = math.sin(2 * math.pi * phase)
        elif waveform == "square":
            value = 1.0 if phase < 0.5 else -1.0
        elif waveform == "sawtooth":
            value = 2.0 * phase - 1.0
        else:
            value = 4.0 * abs(phase - 0.5) - 1.0
        sample = int(value * volume * 32767)
        for _ in range(channels):
            samples.append(sample)
    return samples


class CuePlayer:
    """Plays one synthesized tone per cue; disables itself if the mixer is unavailable."""

    def __init__(self, mute: bool = False):
        self.sounds: Dict[Cue, pygame.mixer.Sound] = {}
        if mute:
            return
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            sample_rate, fmt, channels = pygame.mixer.get_init()
            if fmt != -16:
                log.warning(f"Unsupported mixer format {fmt}, audio disabled")
                return
            for cue, (start, end, seconds, waveform) in CUE_TONES.items():
                samples = synthesize_tone(start, end, seconds, waveform, sample_rate, channels)
                self.sounds[cue] = pygame.mixer.Sound(buffer=samples.tobytes())
        except pygame.error as e:
            log.warning(f"Audio unavailable: {e}")
            self.sounds = {}

    def play(self, cues):
        for cue in cues:
            sound = self.sounds.get(cue)
            if sound is None:
                continue
            try:
                sound.play()
            except pygame.error as e:
                log.warning(f"Could not play {cue.value}: {e}")


# ----------------- Craft painters -----------------

def _paint_ufo(surface: pygame.Surface, r: pygame.Rect):
    pygame.draw.ellipse(surface, (255, 0, 0),
                        (r.x, r.y + r.h * 2 / 3 - r.h / 4, r.w, r.h / 2))
    pygame.draw.ellipse(surface, (192, 192, 192),
                        (r.x + r.w / 2 - r.w / 3, r.y + r.h / 3 - r.h / 5, r.w * 2 / 3, r.h * 2 / 5))


def _paint_rocket(surface: pygame.Surface, r: pygame.Rect):
    pygame.draw.rect(surface, (255, 69, 0), (r.x + r.w / 3, r.y + r.h / 6, r.w / 3, r.h * 2 / 3))
    pygame.draw.polygon(surface, (255, 255, 0), [
        (r.x + r.w / 2, r.y + r.h * 5 / 6),
        (r.x + r.w * 2 / 3, r.bottom),
        (r.x + r.w / 3, r.bottom),
    ])


def _paint_spaceship(surface: pygame.Surface, r: pygame.Rect):
    pygame.draw.polygon(surface, (0, 206, 209), [
        (r.x, r.y + r.h / 2),
        (r.x + r.w / 2, r.y),
        (r.right, r.y + r.h / 2),
        (r.x + r.w * 2 / 3, r.bottom),
        (r.x + r.w / 3, r.bottom),
    ])


def _paint_drone(surface: pygame.Surface, r: pygame.Rect):
    pygame.draw.rect(surface, (255, 215, 0), (r.x + r.w / 4, r.y + r.h * 2 / 5, r.w / 2, r.h / 5))
    pygame.draw.circle(surface, (0, 0, 0), (r.x + r.w / 3, r.y + r.h / 3), 5)
    pygame.draw.circle(surface, (0, 0, 0), (r.x + r.w * 2 / 3, r.y + r.h / 3), 5)


CRAFT_PAINTERS: Dict[Craft, Callable[[pygame.Surface, pygame.Rect], None]] = {
    Craft.UFO: _paint_ufo,
    Craft.ROCKET: _paint_rocket,
    Craft.SPACESHIP: _paint_spaceship,
    Craft.DRONE: _paint_drone,
}


# ----------------- Renderer -----------------

class Renderer:
    """Draws snapshots. Each section is isolated so one failure skips only itself."""

    def __init__(self, screen: pygame.Surface, layout: ScreenLayout):
        self.screen = screen
        self.layout = layout
        self.frame_surface = pygame.Surface(screen.get_size())
        self.overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        self.large_font = pygame.font.Font(None, 48)
        self.font = pygame.font.Font(None, 28)
        self.small_font = pygame.font.Font(None, 20)
        self._gradient_stage: Optional[int] = None
        self._gradient: Optional[pygame.Surface] = None

    def draw(self, snap: FrameSnapshot):
        surface = self.frame_surface
        sections: List[Tuple[str, Callable[[pygame.Surface, FrameSnapshot], None]]] = [
            ("background", self._draw_background),
        ]
        if snap.mode is SessionMode.INTRO:
            sections.append(("intro", self._draw_intro))
        elif snap.mode is SessionMode.PLAYING:
            sections += [
                ("obstacles", self._draw_obstacles),
                ("collectibles", self._draw_collectibles),
                ("player", self._draw_player),
                ("particles", self._draw_particles),
            ]
        else:
            sections += [
                ("end screen", self._draw_end_screen),
                ("particles", self._draw_particles),
            ]
        sections.append(("hud", self._draw_hud))

        for name, section in sections:
            try:
                section(surface, snap)
            except pygame.error as e:
                log.warning(f"Drawing {name} failed: {e}")

        offset = (0, 0)
        if snap.shake_frames > 0:
            offset = (random.uniform(-5, 5), random.uniform(-5, 5))
        self.screen.fill((0, 0, 0))
        self.screen.blit(surface, offset)
        pygame.display.flip()

    def _stage(self, snap: FrameSnapshot) -> int:
        return snap.hud["score"] // 200

    def _draw_background(self, surface: pygame.Surface, snap: FrameSnapshot):
        stage = self._stage(snap)
        if self._gradient is None or self._gradient_stage != stage % 2:
            top = (0, 0, 51) if stage % 2 == 0 else (26, 0, 51)
            height = self.layout.height
            self._gradient = pygame.Surface((self.layout.width, height))
            for y in range(height):
                t = 1 - y / height
                color = tuple(int(c * t) for c in top)
                pygame.draw.line(self._gradient, color, (0, y), (self.layout.width, y))
            self._gradient_stage = stage % 2
        surface.blit(self._gradient, (0, 0))

        scale = 1 + stage * 0.1
        for x, y, size in snap.stars:
            color = random_hue_color(random, lightness=0.8)
            pygame.draw.circle(surface, color, (x, y), size * scale)

        self.overlay.fill((0, 0, 0, 0))
        pulse = math.sin(snap.frame * 0.03) * 0.1 + 1
        alpha = int(255 * (0.4 + (stage % 2) * 0.2))
        for x, y, size, hue in snap.nebulas:
            color = pygame.Color(0)
            color.hsla = (hue, 80, 60, 100)
            color.a = alpha
            pygame.draw.circle(self.overlay, color, (x, y), size * pulse * scale)
        surface.blit(self.overlay, (0, 0))

    def _draw_obstacles(self, surface: pygame.Surface, snap: FrameSnapshot):
        danger = snap.hud["score"] >= 200
        pipe_color = (255, 0, 0) if danger else (192, 192, 192)
        ring_color = (255, 68, 68) if danger else WHITE
        height = self.layout.height

        self.overlay.fill((0, 0, 0, 0))
        for o in snap.obstacles:
            top = 0 if o["top"] else height - o["height"]
            pygame.draw.rect(surface, pipe_color, (o["x"], top, o["w"], o["height"]))
            for ring_y, ring_alpha in o["rings"]:
                y = ring_y if o["top"] else height - o["height"] + ring_y
                pygame.draw.circle(self.overlay, (*ring_color, int(255 * ring_alpha)),
                                   (o["x"] + o["w"] / 2, y), o["w"] / 2, 2)
        surface.blit(self.overlay, (0, 0))

    def _draw_collectibles(self, surface: pygame.Surface, snap: FrameSnapshot):
        radius = 10
        for c in snap.collectibles:
            center = (c["x"], c["y"])
            if c["kind"] == "heart":
                x, y = center
                pygame.draw.polygon(surface, (255, 68, 68), [
                    (x, y + radius / 2), (x - radius, y - radius / 2),
                    (x - radius / 2, y - radius), (x, y - radius / 2),
                    (x + radius / 2, y - radius), (x + radius, y - radius / 2),
                ])
                continue
            fill, text = ((255, 0, 0), WHITE) if c["kind"] == "powerUp" else ((255, 215, 0), (0, 0, 0))
            pygame.draw.circle(surface, fill, center, radius)
            label = self.small_font.render("$", True, text)
            surface.blit(label, label.get_rect(center=center))

    def _draw_player(self, surface: pygame.Surface, snap: FrameSnapshot):
        p = snap.player
        power = snap.power_up["kind"] if snap.power_up else None
        rect = pygame.Rect(int(p["x"]), int(p["y"]), p["w"], p["h"])

        if p["boost"] or power or p["invincible"]:
            if p["boost"]:
                aura = (255, 0, 0)
            elif power in POWER_UP_COLORS and power != "blast":
                aura = POWER_UP_COLORS[power]
            else:
                aura = WHITE
            pygame.draw.circle(surface, aura, rect.center, p["w"] / 2 + 5)

        craft_surface = pygame.Surface((p["w"], p["h"]), pygame.SRCALPHA)
        CRAFT_PAINTERS[Craft[p["craft"]]](craft_surface, craft_surface.get_rect())
        if snap.frame % 10 < 5 and (p["invincible"] or power == "shield"):
            craft_surface.set_alpha(128)
        surface.blit(craft_surface, rect)

    def _draw_particles(self, surface: pygame.Surface, snap: FrameSnapshot):
        for p in snap.particles:
            pygame.draw.circle(surface, p["color"], (p["x"], p["y"]), max(p["size"], 1))

    def _draw_hud(self, surface: pygame.Surface, snap: FrameSnapshot):
        hud = snap.hud
        lines = [
            f"Score: {hud['score']}",
            f"High: {hud['high_score']}",
            f"Level: {hud['level']}",
            f"Lives: {hud['lives']}",
        ]
        for i, line in enumerate(lines):
            surface.blit(self.font.render(line, True, WHITE), (10, 10 + i * 26))

    def _centered(self, surface: pygame.Surface, font: pygame.font.Font, text: str,
                  color, y: float):
        label = font.render(text, True, color)
        surface.blit(label, label.get_rect(center=(self.layout.width / 2, y)))

    def _draw_intro(self, surface: pygame.Surface, snap: FrameSnapshot):
        self._centered(surface, self.large_font, "$FULLSEND", RED, 50)
        self._centered(surface, self.large_font, "COMMUNITY CHALLENGE", RED, 90)
        self._centered(surface, self.font, "Tap an object to start (Unlock at scores):", WHITE, 130)

        for i, area in enumerate(self.layout.object_areas()):
            icon = pygame.Surface(area.size, pygame.SRCALPHA)
            CRAFT_PAINTERS[Craft(i)](icon, icon.get_rect())
            if not snap.unlocks[i]:
                icon.set_alpha(77)
            surface.blit(icon, area)
            label = self.small_font.render(str(FLYING_OBJECTS[i].unlock_score), True, WHITE)
            surface.blit(label, label.get_rect(center=(area.centerx, area.bottom + 12)))

        legend = [
            ((255, 215, 0), "Boost (5 Coins)"),
            ((255, 0, 0), "Random Power-Up:"),
            (POWER_UP_COLORS["double"], "  Double Score"),
            (POWER_UP_COLORS["slow"], "  Slow Motion"),
            (POWER_UP_COLORS["shield"], "  Shield"),
            (POWER_UP_COLORS["blast"], "  Blast"),
            ((255, 68, 68), "Extra Life"),
            (WHITE, "Invincibility (Milestones)"),
        ]
        y = self.layout.object_areas()[0].bottom + 40
        surface.blit(self.small_font.render("Power-Ups:", True, WHITE), (20, y))
        for color, text in legend:
            y += 20
            pygame.draw.rect(surface, color, (20, y, 14, 14))
            surface.blit(self.small_font.render(text, True, WHITE), (40, y))

    def _draw_button(self, surface: pygame.Surface, rect: pygame.Rect, text: str):
        pygame.draw.rect(surface, RED, rect)
        pygame.draw.rect(surface, (0, 0, 0), rect, 2)
        label = self.font.render(text, True, WHITE)
        surface.blit(label, label.get_rect(center=rect.center))

    def _draw_end_screen(self, surface: pygame.Surface, snap: FrameSnapshot):
        mid = self.layout.height / 2
        victory = snap.mode is SessionMode.VICTORY
        if victory:
            self._centered(surface, self.large_font, "Victory!", (0, 255, 0), mid - 150)
            self._centered(surface, self.font, "You Escaped the Galaxy!", WHITE, mid - 100)
        else:
            self._centered(surface, self.large_font, "Game Over", RED, mid - 150)
            self._centered(surface, self.font, "Top $fullsend Scores:", WHITE, mid - 80)
            for i, (name, score) in enumerate(MOCK_LEADERS):
                self._centered(surface, self.font, f"{i + 1}. {name} - {score}", WHITE, mid - 40 + i * 40)

        self._draw_button(surface, self.layout.play_again_button(), "SEND AGAIN")
        self._draw_button(surface, self.layout.share_button(), "POST SCORE TO X")


# ----------------- Game Client (driver loop) -----------------

class FullsendClient:
    def __init__(self, session: GameSession, config: GameConfig):
        pygame.init()
        self.session = session
        self.config = config
        self.screen = pygame.display.set_mode((config.width, config.height))
        pygame.display.set_caption("$FULLSEND Community Challenge")

        self.layout = ScreenLayout(config.width, config.height)
        self.renderer = Renderer(self.screen, self.layout)
        self.audio = CuePlayer(mute=config.mute)
        self.clock = pygame.time.Clock()
        self.last_snapshot: Optional[FrameSnapshot] = None

    def run(self):
        """The main client execution loop."""
        running = True
        while running:
            self.clock.tick(self.config.fps)
            now = pygame.time.get_ticks()

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                else:
                    self._handle_event(event, now)

            snap = self.session.advance_frame(now)
            if snap is not None:
                self.last_snapshot = snap
                self.audio.play(snap.cues)
            if self.last_snapshot is not None:
                self.renderer.draw(self.last_snapshot)

        pygame.quit()

    def _handle_event(self, event: pygame.event.Event, now: int):
        intent = intent_for_event(event, self.session.mode, self.layout)
        if intent is None:
            return
        accepted = self.session.handle_intent(intent, now)
        if accepted and intent == Intent.share() and self.session.last_share_text:
            try:
                webbrowser.open(share_url(self.session.last_share_text))
            except webbrowser.Error as e:
                log.warning(f"Could not open share link: {e}")
