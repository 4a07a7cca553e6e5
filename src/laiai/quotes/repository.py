from __future__ import annotations

from laiai.quotes.schemas import Quote


def _q(id_: int, text: str, translation: str, author: str) -> Quote:
    return Quote(id=id_, text=text, translation=translation, author=author)


STATIC_QUOTES: tuple[Quote, ...] = (
    _q(1, "The only way to do great work is to love what you do.",
       "Rian ṭha ṭuan khawh nak lam khat chauh a um, mah na ṭuan mi rian kha dawt a si.",
       "Steve Jobs"),
    _q(2, "Believe you can and you're halfway there.",
       "Ka tuah khawh lai tiah na zumh ahcun, a cheu na phan cang.",
       "Theodore Roosevelt"),
    _q(3, "It does not matter how slowly you go as long as you do not stop.",
       "Na din lo paoh ahcun, zeizat in dah na kal muan ti a biapi lo.",
       "Confucius"),
    _q(4, "Your time is limited, don't waste it living someone else's life.",
       "Na caan a tlawm, midang nun in nung hlah.",
       "Steve Jobs"),
    _q(5, "The future belongs to those who believe in the beauty of their dreams.",
       "Hmailei cu an manh a dawhnak a zum mi hna ta a si.",
       "Eleanor Roosevelt"),
    _q(6, "Don't watch the clock; do what it does. Keep going.",
       "Nazi zoh hlah; amah nih a tuah mi kha tuah ve. Kal peng.",
       "Sam Levenson"),
    _q(7, "Success is not final, failure is not fatal: It is the courage to continue that counts.",
       "Awn nak hi a donghnak a si lo, sungh nak hi thih nak a si lo: Pehzulh ngam nak lungthin hi a biapi bik mi cu a si.",
       "Winston Churchill"),
    _q(8, "You are never too old to set another goal or to dream a new dream.",
       "Hmuitinh thar chiah ding le manh thar man ding in na upa tuk bal lo.",
       "C.S. Lewis"),
    _q(9, "Start where you are. Use what you have. Do what you can.",
       "Na um nak hmun in thawk. Na ngeih mi hmang. Na tuah khawh mi tuah.",
       "Arthur Ashe"),
    _q(10, "Life is 10% what happens to us and 90% how we react to it.",
       "Nunnak hi kan cung i a tlung mi 10% a si i, kan lehrulh ning hi 90% a si.",
       "Charles R. Swindoll"),
    _q(11, "With the new day comes new strength and new thoughts.",
       "Ni thar he thazaang thar le ruahnak thar an ra.",
       "Eleanor Roosevelt"),
    _q(12, "Failure will never overtake me if my determination to succeed is strong enough.",
       "Hlawhtlin duhnak lungthin ka ngeih mi a ṭhawn ahcun, sunghnak nih a ka tei bal lai lo.",
       "Og Mandino"),
    _q(13, "Quality is not an act, it is a habit.",
       "A ṭhatnak cu tuahnak men a si lo, ziaza tu a si.",
       "Aristotle"),
    _q(14, "It always seems impossible until it's done.",
       "Tuah dih hlan paoh cu a si kho lo mi a lo lengmang.",
       "Nelson Mandela"),
    _q(15, "Good, better, best. Never let it rest. 'Til your good is better and your better is best.",
       "A ṭha, a ṭha deuh, a ṭha bik. Na ṭha kha ṭha deuh, na ṭha deuh kha ṭha bik a si hlan lo din hlah.",
       "St. Jerome"),
    _q(16, "Optimism is the faith that leads to achievement. Nothing can be done without hope and confidence.",
       "A ṭha lei in hmuh nak hi hlawhtlinnak lei hruaitu zumhnak a si. Ruahchannak le i zumhngamnak lo cun zeihmanh tuah khawh a si lo.",
       "Helen Keller"),
    _q(17, "Keep your face always toward the sunshine, and shadows will fall behind you.",
       "Ni ceu lei ah na hmai chit zungzal, cun thlaimun cu na hnu lei ah a um lai.",
       "Walt Whitman"),
    _q(18, "The secret of getting ahead is getting started.",
       "Hmailei panh khawhnak a biathli cu i/thawk hi a si.",
       "Mark Twain"),
    _q(19, "Setting goals is the first step in turning the invisible into the visible.",
       "Hmuitinh chiah cu hmuh khawh lo mi kha hmuh khawh mi ah chuahter nak a step hmasa bik a si.",
       "Tony Robbins"),
    _q(20, "You don't have to be great to start, but you have to start to be great.",
       "I thawk ding in na ṭhat a hau lo, asinain ṭha ding in i thawk na hau.",
       "Zig Ziglar"),
)
