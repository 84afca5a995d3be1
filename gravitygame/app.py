"""The windowed game: input, sound, drawing and the main loop."""

from __future__ import annotations

import logging
import sys

import pygame

from .defs import SCREEN_HEIGHT, SCREEN_WIDTH, Rect
from .resources import ResourceError, ResourceLocator
from .seajson import SeaJSONError
from .state import GameState, InputState
from .zones import Zone

_log = logging.getLogger(__name__)

WINDOW_TITLE = "Gravity"
FRAME_RATE = 60

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)
PURPLE = (128, 0, 128, 255)
PREVIEW_ALPHA = 100

CONTROLLER_DEADZONE = 800
_AXIS_SCALE = 32767
_AXIS_LEFT_X = 0
# Button numbers of the common XInput-style layout.
JOY_BUTTON_A = 0
JOY_BUTTON_B = 1
JOY_BUTTON_START = 7

LEVEL_PATH = "level_dev.json"
BACKGROUND_PATH = "resources/pixil-frame-0.png"
MUSIC_PATH = "resources/sonic_3_at_3am.wav"
JUMP_PATH = "resources/jump.mp3"
BLANK_PATH = "resources/blank.mp3"
JUMP_GUARD_CHANNEL = 3
JUMP_GUARD_MS = 100

SPRITE_PATHS = (
    "resources/trick_sprites/trick.png",
    "resources/trick_sprites/trick-lookup.png",
    "resources/trick_sprites/trick-lookleft.png",
    "resources/trick_sprites/trick-lookleftup.png",
    "resources/trick_sprites/trick-ud.png",
    "resources/trick_sprites/trick-ud-lookup.png",
    "resources/trick_sprites/trick-ud-lookleft.png",
    "resources/trick_sprites/trick-ud-lookleftup.png",
)


def find_controller():
    """Open and return the first connected game controller, or None."""
    if not pygame.joystick.get_init():
        pygame.joystick.init()
    for index in range(pygame.joystick.get_count()):
        try:
            controller = pygame.joystick.Joystick(index)
        except pygame.error:
            continue
        if not controller.get_init():
            controller.init()
        return controller
    return None


class Sound:
    """Background music and the jump effect."""

    def __init__(self, locator: ResourceLocator) -> None:
        self.locator = locator
        self._ready = False
        self._jump = None
        self._blank = None

    def play_music(self) -> bool:
        """Open the mixer and loop the background music; return True if it plays."""
        try:
            pygame.mixer.init(44100, -16, 2, 2048)
        except pygame.error as exc:
            _log.error("could not initialize mixer: %s", exc)
            return False
        self._ready = True
        try:
            pygame.mixer.music.load(self.locator.find(MUSIC_PATH))
        except (pygame.error, OSError) as exc:
            _log.error("could not load background music: %s", exc)
            return False
        try:
            pygame.mixer.music.play(-1)
        except pygame.error as exc:
            _log.error("could not play background music: %s", exc)
            return False
        return True

    def _load_effects(self) -> bool:
        if self._jump is not None and self._blank is not None:
            return True
        try:
            self._jump = pygame.mixer.Sound(self.locator.find(JUMP_PATH))
            self._blank = pygame.mixer.Sound(self.locator.find(BLANK_PATH))
        except (pygame.error, OSError) as exc:
            _log.error("could not load jump sound: %s", exc)
            self._jump = self._blank = None
            return False
        return True

    def jump(self) -> bool:
        """Play the jump effect unless one started moments ago; return True if played."""
        if not self._ready or not self._load_effects():
            return False
        guard = pygame.mixer.Channel(JUMP_GUARD_CHANNEL)
        if guard.get_busy():
            return False
        # A silent sample held on a fixed channel marks how long to wait between jumps.
        guard.play(self._blank, loops=-1, maxtime=JUMP_GUARD_MS)
        self._jump.play()
        return True

    def pause(self) -> None:
        """Pause every channel and the music."""
        if self._ready:
            pygame.mixer.pause()
            pygame.mixer.music.pause()

    def resume(self) -> None:
        """Resume every channel and the music."""
        if self._ready:
            pygame.mixer.unpause()
            pygame.mixer.music.unpause()

    def cleanup(self) -> None:
        """Stop all sound and close the mixer."""
        if not self._ready:
            return
        pygame.mixer.music.stop()
        pygame.mixer.quit()
        self._ready = False
        self._jump = self._blank = None


def _key_initial(key: int) -> str:
    return pygame.key.name(key)[:1].upper()


def _to_pygame(rect: Rect) -> pygame.Rect:
    return pygame.Rect(rect.x, rect.y, rect.w, rect.h)


class Game:
    """Connects a :class:`GameState` to the window, input devices and sound."""

    def __init__(self, state: GameState, locator: ResourceLocator, sound: Sound | None = None,
                 screen: pygame.Surface | None = None) -> None:
        self.state = state
        self.locator = locator
        self.sound = sound
        self.screen = screen
        self.controller = None
        self.sprites: list[pygame.Surface] = []
        self.background: pygame.Surface | None = None

    def _load_image(self, path: str) -> pygame.Surface:
        resource = self.locator.find(path)
        _log.info("resource (tex): %s", resource)
        return pygame.image.load(resource).convert_alpha()

    def _load_assets(self) -> None:
        self.sprites = [self._load_image(path) for path in SPRITE_PATHS]
        background = self._load_image(BACKGROUND_PATH)
        self.background = pygame.transform.scale(background, (SCREEN_WIDTH, SCREEN_HEIGHT))

    def _owns(self, instance_id) -> bool:
        return self.controller is not None and instance_id == self.controller.get_instance_id()

    def _handle_event(self, event: pygame.event.Event) -> None:
        state = self.state
        if event.type == pygame.QUIT:
            state.running = False
        elif event.type == pygame.KEYDOWN:
            initial = _key_initial(event.key)
            if initial == "Z":
                state.flip_gravity()
            elif initial == "P":
                state.toggle_pause()
        elif event.type == pygame.MOUSEBUTTONDOWN:
            x, y = event.pos
            if event.button == 1:
                state.left_click(x, y)
            elif event.button == 3:
                state.right_click(x, y)
        elif event.type == pygame.JOYDEVICEADDED:
            if self.controller is None:
                try:
                    self.controller = pygame.joystick.Joystick(event.device_index)
                except pygame.error as exc:
                    _log.warning("could not open controller: %s", exc)
        elif event.type == pygame.JOYDEVICEREMOVED:
            if self._owns(event.instance_id):
                self.controller.quit()
                self.controller = find_controller()
        elif event.type == pygame.JOYBUTTONDOWN:
            if self._owns(event.instance_id):
                if event.button == JOY_BUTTON_B:
                    state.flip_gravity()
                elif event.button == JOY_BUTTON_START:
                    state.toggle_pause()

    def _read_inputs(self) -> InputState:
        keys = pygame.key.get_pressed()
        left = bool(keys[pygame.K_LEFT])
        right = bool(keys[pygame.K_RIGHT])
        jump = bool(keys[pygame.K_UP])
        if self.controller is not None:
            axis = self.controller.get_axis(_AXIS_LEFT_X) * _AXIS_SCALE
            if axis < -CONTROLLER_DEADZONE:
                left = True
            elif axis > CONTROLLER_DEADZONE:
                right = True
            if not jump:
                jump = bool(self.controller.get_button(JOY_BUTTON_A))
        return InputState(left=left, right=right, jump=jump)

    def handle_events(self) -> None:
        """Process pending events, then apply the held controls to the player."""
        for event in pygame.event.get():
            self._handle_event(event)
        if self.state.awaiting_next_rect:
            self.state.preview(*pygame.mouse.get_pos())
        if self.state.paused:
            return
        self.state.apply_input(self._read_inputs())

    def render(self) -> None:
        """Draw the background, platforms, placement preview and player."""
        screen = self.screen
        if screen is None:
            raise RuntimeError("no screen to render to")
        state = self.state
        screen.fill(BLACK)
        if self.background is not None:
            screen.blit(self.background, (0, 0))
        for shown in state.zone.display:
            pygame.draw.rect(screen, WHITE, _to_pygame(shown))
        pending = state.pending_rect_display
        if state.awaiting_next_rect and pending.w > 0 and pending.h > 0:
            overlay = pygame.Surface((pending.w, pending.h), pygame.SRCALPHA)
            overlay.fill((*PURPLE[:3], PREVIEW_ALPHA))
            screen.blit(overlay, (pending.x, pending.y))
        if self.sprites:
            sprite = self.sprites[state.animation_index]
            scaled = pygame.transform.scale(sprite, (state.rect.w, state.rect.h))
            screen.blit(scaled, (state.rect.x, state.rect.y))
        if screen is pygame.display.get_surface():
            pygame.display.flip()

    def run(self) -> int:
        """Load assets and run the main loop until the game is closed."""
        if self.screen is None:
            self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
            pygame.display.set_caption(WINDOW_TITLE)
        self.controller = find_controller()
        _log.info("Starting game...")
        self._load_assets()
        self.render()
        if self.sound is not None:
            self.sound.play_music()
        clock = pygame.time.Clock()
        try:
            while self.state.running:
                self.handle_events()
                if not self.state.paused:
                    self.state.update()
                self.render()
                clock.tick(FRAME_RATE)
        finally:
            _log.info("closing...")
            if self.sound is not None:
                self.sound.cleanup()
        return 0


def main(argv=None) -> int:
    """Start the game with resources next to ``argv[0]``; return the exit status."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = sys.argv if argv is None else argv
    if not args:
        print("GravityGame Error: No argv present", file=sys.stderr)
        return 1
    try:
        locator = ResourceLocator.from_executable(args[0])
    except ResourceError as exc:
        print(f"GravityGame Error: {exc}", file=sys.stderr)
        return 1
    _log.info("resourcePath: %s", locator.base)
    try:
        zone = Zone.from_file(locator.find(LEVEL_PATH))
    except SeaJSONError as exc:
        print(f"GravityGame Error: {exc}", file=sys.stderr)
        return 1

    pygame.init()
    try:
        try:
            screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        except pygame.error as exc:
            print(f"error creating window: {exc}", file=sys.stderr)
            return 1
        pygame.display.set_caption(WINDOW_TITLE)
        sound = Sound(locator)
        state = GameState(zone=zone, audio=sound)
        game = Game(state, locator, sound=sound, screen=screen)
        try:
            return game.run()
        except (pygame.error, OSError) as exc:
            print(f"error creating texture: {exc}", file=sys.stderr)
            return 1
    finally:
        pygame.quit()


if __name__ == "__main__":
    sys.exit(main())